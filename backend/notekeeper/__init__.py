"""
Notekeeper Backend: Application Package Initializer
=====================================================

What: Marks the `notekeeper` directory as a Python package.
Why:  Enables module imports like `from notekeeper.config import settings`.
Who:  Used by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend follows a layered architecture, with a client package on top
    that talks to it over HTTP:

    ┌─────────────────────────────────────┐
    │     Client (View-Model + HTTP)      │  ← reducer, effects, NotesClient
    ├─────────────────────────────────────┤
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (validation, store)    │  ← NoteService, NoteStore
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes turn HTTP into service calls, services validate and translate
    store outcomes into application exceptions, and the store runs exactly
    one SQL statement per operation against the session it was given.
"""

__version__ = "1.0.0"
