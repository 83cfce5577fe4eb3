"""
Acronym API: Application Package Initializer
===============================================

What: Marks the `acronym_api` directory as a Python package.
Why:  Enables module imports like `from acronym_api.config import settings`.
Who:  Used by uvicorn (`acronym_api.main:app`), pytest, and the seed command.

Architecture Note:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │    Services (Validation + Rules)    │  ← Pagination, conflicts, 404s
    ├─────────────────────────────────────┤
    │        Schemas (API contract)       │  ← Pydantic envelope + bodies
    ├─────────────────────────────────────┤
    │   Database (per-request Motor)      │  ← MongoDB collection access
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
