"""
Notekeeper Backend: Database Session Management
=================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   Creates an async engine with connection pooling, provides a session
       dependency that rolls back on error and always closes.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created at module import; sessions are created per-request.

Session scoping:
    Nothing below the route layer reaches for a process-wide handle. Each
    request opens its own AsyncSession and hands it to a NoteStore; tests do
    the same with their own engine. The engine here is only the pool the
    per-request sessions are drawn from.
"""

from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from notekeeper.config import settings


def build_engine(database_url: str) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    SQLite keeps the pool SQLAlchemy picks for its driver (a static pool for
    in-memory databases, which rejects sizing arguments), so those are only
    passed to server databases.
    """
    options = {
        "pool_pre_ping": settings.db_pool_pre_ping,
        # Echo SQL queries in DEBUG mode for development visibility
        "echo": settings.log_level == "DEBUG",
    }
    if not database_url.startswith("sqlite"):
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_recycle=3600,
        )
    return create_async_engine(database_url, **options)


# ── Engine Configuration ──────────────────────────────────────────────────
engine = build_engine(settings.database_url)

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: returned Note objects stay readable after the
# dependency commits, without triggering a lazy load outside the session
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, used by `create_tables()` and by
    Alembic's migration environment.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler (the handler builds a NoteStore on it)
        3. On error: rolls back the transaction
        4. Always: closes the session (returns connection to pool)

    No commit happens here. This teardown can run after the response has
    been sent, so NoteService commits each write itself, inside the block
    that maps failures to a 500.

    Tests swap this out through `app.dependency_overrides` to point the
    whole API at a throwaway in-memory database.
    """
    async with async_session_factory() as session:
        try:
            yield session
        except Exception:
            # Roll back on ANY failure, including non-DB errors raised
            # after a statement already ran inside this transaction
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_tables(bind: Optional[AsyncEngine] = None) -> None:
    """
    What:  Creates every table registered on Base.metadata if missing.
    When:  Application startup when `db_create_tables` is on, and test setup.
    """
    # Import models so they are registered on Base.metadata
    from notekeeper.models.note import Note  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
