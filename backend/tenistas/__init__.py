"""
Tenistas API — Application Package Initializer
===============================================

What: Marks the `tenistas` directory as a Python package.
Why:  Enables module imports like `from tenistas.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The racket service follows a layered architecture:

    ┌─────────────────────────────────────┐
    │        Routes (Controller Layer)    │  ← HTTP verbs, paths, status codes
    ├─────────────────────────────────────┤
    │     Mappers (DTO ↔ Entity + checks) │  ← Request validation, conversion
    ├─────────────────────────────────────┤
    │       Services (Orchestration)      │  ← Absent → NotFoundError
    ├─────────────────────────────────────┤
    │   Repositories (Source of truth)    │  ← In-memory table or SQLAlchemy
    └─────────────────────────────────────┘

    Routes never touch repositories directly, and repositories never raise
    "not found" on lookups — absence is a normal result until the service
    decides it is an error.
"""

__version__ = "1.0.0"
