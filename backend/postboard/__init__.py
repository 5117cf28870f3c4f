"""
Postboard Backend — Application Package Initializer
====================================================

What: Marks the `postboard` directory as a Python package.
Who:  Used by uvicorn (`postboard.main:app`), pytest, and `python -m postboard`.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (PostService, Quotes)    │  ← Error translation, logging
    ├─────────────────────────────────────┤
    │      Schemas (open Post mapping)    │  ← Pydantic views
    ├─────────────────────────────────────┤
    │  Document Store (Firestore / memory)│  ← Persistence
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
