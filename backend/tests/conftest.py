"""
Tenistas API — Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (repositories, sessions, API client).
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, created fresh for each test):
    ├── raqueta_factory: Builds unsaved Raqueta entities
    ├── memory_repository: Empty InMemoryRaquetasRepository
    ├── mock_repository: AsyncMock standing in for any RaquetasRepository
    ├── sql_session: AsyncSession on a private in-memory SQLite database
    ├── database_engine: the app's engine swapped for an in-memory SQLite one
    ├── app: FastAPI app with its own empty in-memory racket table
    ├── test_client: HTTPX AsyncClient talking to `app`
    ├── backend_app: app per repository backend (memory, database)
    └── backend_client: HTTPX AsyncClient talking to `backend_app`
"""

import os
from typing import AsyncGenerator
from unittest.mock import AsyncMock

# Override settings for testing BEFORE any tenistas imports
os.environ["REPOSITORY_BACKEND"] = "memory"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from tenistas.database import Base
from tenistas.models.raqueta import Raqueta
from tenistas.repositories.memory import InMemoryRaquetasRepository


def build_raqueta(**overrides) -> Raqueta:
    """Unsaved racket with sensible defaults; keyword overrides win."""
    fields = {
        "brand": "Wilson",
        "model": "Pro Staff",
        "price": 199.99,
        "image_ref": "https://example.com/pro-staff.png",
    }
    fields.update(overrides)
    return Raqueta(**fields)


@pytest.fixture
def raqueta_factory():
    """
    Provides build_raqueta() for creating unsaved rackets.

    Usage:
        def test_x(raqueta_factory):
            raqueta = raqueta_factory(brand="Head")
    """
    return build_raqueta


@pytest.fixture
def memory_repository():
    """A fresh, empty in-memory repository."""
    return InMemoryRaquetasRepository()


@pytest.fixture
def mock_repository():
    """
    Provides a mock repository.

    Usage:
        async def test_find(mock_repository):
            mock_repository.find_by_id.return_value = None
            ...
    """
    repository = AsyncMock()
    repository.find_all = AsyncMock(return_value=[])
    repository.find_by_id = AsyncMock(return_value=None)
    repository.find_by_external_id = AsyncMock(return_value=None)
    repository.find_all_by_brand = AsyncMock(return_value=[])
    repository.exists_by_id = AsyncMock(return_value=False)
    repository.save = AsyncMock()
    repository.update = AsyncMock()
    repository.delete_by_id = AsyncMock()
    return repository


def _sqlite_memory_engine():
    # StaticPool keeps the single connection (and therefore the database)
    # alive until the engine is disposed
    return create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )


@pytest_asyncio.fixture
async def sql_session() -> AsyncGenerator[AsyncSession, None]:
    """AsyncSession on a throwaway in-memory SQLite database."""
    engine = _sqlite_memory_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture
async def database_engine(monkeypatch) -> AsyncGenerator[AsyncEngine, None]:
    """
    Points the application's engine and session factory at a private
    in-memory SQLite database with the tables already created.

    Everything that goes through tenistas.database (session_scope,
    init_models, dispose_engine) and the /health probe uses it.
    """
    from tenistas import database
    from tenistas.routes import health

    engine = _sqlite_memory_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    monkeypatch.setattr(database, "engine", engine)
    monkeypatch.setattr(
        database,
        "async_session_factory",
        async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False),
    )
    monkeypatch.setattr(health, "engine", engine)

    yield engine

    await engine.dispose()


@pytest.fixture
def app():
    """A new app; each one owns an empty in-memory racket table."""
    from tenistas.main import create_app
    return create_app(repository_backend="memory")


@pytest_asyncio.fixture
async def test_client(app) -> AsyncGenerator[AsyncClient, None]:
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture(params=["memory", "database"])
def backend_app(request, database_engine):
    """An app for each repository backend; the database one starts empty."""
    from tenistas.main import create_app
    return create_app(repository_backend=request.param)


@pytest_asyncio.fixture
async def backend_client(backend_app) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for backend_app; tests using it run once per backend."""
    transport = ASGITransport(app=backend_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
