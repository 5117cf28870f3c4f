# Middleware package init
"""
Postboard Backend — Middleware Package
========================================

Middleware Chain (request direction):
    Request → [Request ID] → [CORS] → [GZip] → [Logging] → Route Handler

    - Request ID runs first so every response and log line carries the id
    - CORS answers preflight OPTIONS requests and decorates every response
    - Logging sits innermost so the 500 it produces for unhandled errors
      still passes through CORS and Request ID
"""
