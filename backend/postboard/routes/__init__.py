# Routes package init
"""
Postboard Backend — API Routes Package
========================================

Route Inventory:
    - posts.py:   GET    /posts        (list every post)
                  POST   /posts        (create a post)
                  PUT    /posts/{id}   (replace a post)
                  DELETE /posts/{id}   (delete a post)
    - motive.py:  GET    /motive       (relay a motivational statement)
    - health.py:  GET    /health       (process health check)

Routes stay thin: decode the request, call one service method, shape the
response. Failures surface as exceptions handled globally in main.py.
"""
