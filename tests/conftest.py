"""
Top-level pytest configuration.

Provides:
  - A test SQLite database (aiosqlite) with all tables created fresh per test.
  - A db_session fixture that rolls back each test in a transaction.
  - A fakeredis instance standing in for Redis everywhere.
  - An async_client fixture wired to the FastAPI app, with the request and
    background-task database sessions pointed at the test session.
  - A persisted hirer user and matching auth headers.
"""

from __future__ import annotations

import os
import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator

# ---------------------------------------------------------------------------
# Environment must be set BEFORE any app module is imported so that
# pydantic-settings picks up the test values.
# ---------------------------------------------------------------------------
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("POSTGRES_HOST", "localhost")
os.environ.setdefault("POSTGRES_USER", "test")
os.environ.setdefault("POSTGRES_PASSWORD", "test")
os.environ.setdefault("POSTGRES_DB", "test")
os.environ.setdefault("JWT_SECRET", "test-secret-key-that-is-long-enough-32c")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

# ---------------------------------------------------------------------------
# SQLite in-memory URL for testing.
# ---------------------------------------------------------------------------
TEST_DATABASE_URL = os.getenv(
    "TEST_DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)


# ---------------------------------------------------------------------------
# Test engine (SQLite in-memory, shared via StaticPool so all connections
# see the same data within a test).
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine():
    """Create the SQLite test engine and all tables."""
    # Import Base here (after env vars are set) to ensure models register.
    from app.core.database import Base
    import app.models  # noqa: F401

    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


# ---------------------------------------------------------------------------
# Per-test DB session that rolls back after each test for isolation.
#
# commit() is turned into flush() so that code under test which commits
# (the interaction-tracking background task) keeps its writes inside the
# outer transaction, which is rolled back at teardown.
# ---------------------------------------------------------------------------
class _NonCommittingSession(AsyncSession):
    """AsyncSession subclass where commit() becomes flush()."""

    async def commit(self) -> None:  # type: ignore[override]
        await self.flush()


@pytest_asyncio.fixture
async def db_session(engine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a per-test database session that is fully rolled back on teardown."""
    async with engine.connect() as conn:
        await conn.begin()  # outer real transaction

        session = _NonCommittingSession(
            bind=conn,
            expire_on_commit=False,
        )

        try:
            yield session
        finally:
            await session.close()
            await conn.rollback()


# ---------------------------------------------------------------------------
# Redis: fakeredis stands in so cache code runs without a server.
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def fake_redis(monkeypatch):
    """Replace the Redis client with an in-process fakeredis instance."""
    from fakeredis import FakeServer
    from fakeredis.aioredis import FakeRedis

    redis = FakeRedis(server=FakeServer(), decode_responses=True)

    async def _get_redis():
        return redis

    monkeypatch.setattr("app.core.cache.get_redis", _get_redis)
    return redis


# ---------------------------------------------------------------------------
# HTTP client with database dependencies overridden.
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Provide an httpx AsyncClient backed by the FastAPI app.

    Both the request-scoped session and the session factory used by
    background tasks yield the test session, so everything a test seeds is
    visible to the app and everything the app writes is visible to the test.
    """
    from app.core.database import get_db, get_session_factory
    from app.main import app

    async def _override_get_db():
        yield db_session

    @asynccontextmanager
    async def _test_session():
        yield db_session

    def _override_session_factory():
        return _test_session

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_session_factory] = _override_session_factory

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://testserver",
    ) as client:
        yield client

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Seeded fixtures
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession):
    """Persisted hirer account for integration tests."""
    from app.models.user import User

    user = User(
        id=uuid.uuid4(),
        email="hirer@example.com",
        full_name="Test Hirer",
        is_verified=True,
    )
    db_session.add(user)
    await db_session.flush()
    return user


@pytest.fixture
def user_token(test_user) -> str:
    """Valid access token for the hirer test user."""
    from app.core.security import create_access_token
    return create_access_token(data={"sub": str(test_user.id)})


@pytest.fixture
def auth_headers(user_token: str) -> dict[str, str]:
    """Authorization headers for the hirer test user."""
    return {"Authorization": f"Bearer {user_token}"}
