"""
ProductHub Backend — Application Package Initializer
======================================================

What: Marks the `app` directory as a Python package.
Who:  Imported by uvicorn (app.main:app), `python -m app`, and pytest.

Architecture Note:
    This backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │     Routes + fallback adapter       │  ← HTTP concerns, default payloads
    ├─────────────────────────────────────┤
    │         Services                    │  ← One per collection, raise typed errors
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Documents (open schema) + responses
    ├─────────────────────────────────────┤
    │     Database (MongoStore)           │  ← Lazy, lock-guarded MongoDB client
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
