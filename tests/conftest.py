"""
Pytest fixtures - test DB, Redis, clients, logged-in users (TDD/BDD support).
Challenge: Isolated tests; fresh in-memory database and fake Redis per test.
"""

import os

# Before any app import: settings are read once and cached
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("AUTH_STRATEGY", "store")

from typing import AsyncGenerator

import fakeredis
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.cache.redis_client import get_redis
from app.db.base import Base
from app.db.session import configure_sqlite, get_db
from app.main import app

TEST_DATABASE_URL = "sqlite+aiosqlite://"
PASSWORD = "password123"


def _create_test_engine() -> AsyncEngine:
    # One shared in-memory connection for the whole test
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    configure_sqlite(engine)
    return engine


async def _create_schema(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def _db_override(maker: async_sessionmaker):
    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with maker() as s:
            try:
                yield s
                await s.commit()
            except Exception:
                await s.rollback()
                raise

    return override_get_db


@pytest_asyncio.fixture
async def engine():
    engine = _create_test_engine()
    await _create_schema(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(engine) -> async_sessionmaker:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as s:
        yield s


@pytest_asyncio.fixture
async def redis():
    client = fakeredis.FakeAsyncRedis(decode_responses=True)
    yield client
    await client.flushall()
    await client.aclose()


@pytest_asyncio.fixture
async def overrides(session_maker, redis):
    async def override_get_redis():
        return redis

    app.dependency_overrides[get_db] = _db_override(session_maker)
    app.dependency_overrides[get_redis] = override_get_redis
    yield app.dependency_overrides
    app.dependency_overrides.clear()


def _client() -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest_asyncio.fixture
async def client(overrides):
    """Anonymous client. Each client has its own cookie jar, i.e. its own session."""
    async with _client() as ac:
        yield ac


async def register_and_login(client: AsyncClient, email: str, password: str = PASSWORD) -> dict:
    r = await client.post("/auth/register", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    r = await client.post("/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()


@pytest_asyncio.fixture
async def alice(overrides):
    async with _client() as ac:
        ac.user = await register_and_login(ac, "alice@example.com")
        yield ac


@pytest_asyncio.fixture
async def bob(overrides):
    async with _client() as ac:
        ac.user = await register_and_login(ac, "bob@example.com")
        yield ac


@pytest.fixture
def sync_client():
    """Blocking TestClient for pytest-bdd steps; the database lives on the client's event loop."""
    engine = _create_test_engine()
    maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    fake_redis = fakeredis.FakeAsyncRedis(decode_responses=True)

    async def override_get_redis():
        return fake_redis

    app.dependency_overrides[get_db] = _db_override(maker)
    app.dependency_overrides[get_redis] = override_get_redis
    with TestClient(app) as tc:
        tc.portal.call(_create_schema, engine)
        yield tc
        tc.portal.call(engine.dispose)
    app.dependency_overrides.clear()
