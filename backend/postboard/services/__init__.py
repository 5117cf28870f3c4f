# Services package init
"""
Postboard Backend — Services Layer
====================================

Service Inventory:
    - DocumentStore (abstract): collection/id document persistence contract
    - FirestoreDocumentStore / InMemoryDocumentStore: concrete stores
    - PostService: the four post operations, with error translation
    - QuoteService: pass-through client for the affirmation API
"""
