"""
Tenistas API — Database Session Management
============================================

What:  Async SQLAlchemy engine, session factory, and transactional session scope.
Why:   Centralizes all database connection logic in one place.
How:   Creates an async engine, provides a session scope that
       auto-commits on success and auto-rolls-back on error.
Who:   Used by deps.get_raquetas_repository() and the startup seeding.
When:  Engine is created at module import; sessions are created per-request.

Transactions:
    The relational store is the only source of atomicity for the database
    backend. One session per request; commit after the handler returns,
    rollback on any exception. Connection failures surface as DatabaseError
    and are never retried.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from tenistas.config import settings
from tenistas.exceptions import DatabaseError

logger = logging.getLogger(__name__)


def _engine_options() -> Dict[str, Any]:
    """
    Build keyword arguments for create_async_engine.

    SQLite engines use a single-connection pool that rejects pool_size and
    max_overflow, so those are only passed for server databases.
    """
    options: Dict[str, Any] = {
        "echo": settings.log_level == "DEBUG",
    }
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(settings.database_url, **_engine_options())

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: response DTOs are built from ORM objects after the
# flush, and must not trigger lazy loads once the session is gone
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object so Alembic and init_models() see every table.
    """
    pass


# ── Session Scope ─────────────────────────────────────────────────────────
@asynccontextmanager
async def session_scope() -> AsyncGenerator[AsyncSession, None]:
    """
    Transactional scope around a series of operations.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the caller (repository, seeding, health check)
        3. On success: commits the transaction (a failed commit raises
           DatabaseError, so callers see it like any other storage failure)
        4. On error: rolls back and re-raises
        5. Always: closes the session (returns connection to pool)
    """
    async with async_session_factory() as session:
        try:
            yield session
            try:
                await session.commit()
            except SQLAlchemyError as e:
                logger.error("Commit failed: %s", str(e), exc_info=True)
                raise DatabaseError(
                    context={"operation": "commit", "error_type": type(e).__name__},
                ) from e
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def init_models() -> None:
    """
    Create all tables registered on Base.metadata.

    When:  Startup, for the database backend with DB_CREATE_TABLES enabled.
    Note:  create_all is idempotent; existing tables are left alone.
    """
    # Importing registers the model with Base.metadata
    from tenistas.models.raqueta import Raqueta  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """Gracefully closes all connections in the pool on shutdown."""
    await engine.dispose()
