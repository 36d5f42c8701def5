"""
Bookshelf API: Application Package Initializer
===============================================

What: Marks the `bookshelf` directory as a Python package.
Who:  Used by uvicorn (`bookshelf.main:app`), pytest, and the `bookshelf` console script.

Architecture Note:
    ┌─────────────────────────────────────┐
    │   Middleware (request logger)       │  ← observes every completed response
    ├─────────────────────────────────────┤
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (books, log sink)        │  ← business rules, file appends
    ├─────────────────────────────────────┤
    │        Schemas (Pydantic)           │  ← API contracts, log records
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
