"""API test fixtures: async SQLite database + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database with the records table
    - get_services overridden with services wired over that database
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - cascade_concurrency=1: the in-memory engine shares one connection, so
      cascade deletes run one at a time
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from app.config import Settings
from app.db.base import Base
from app.infrastructure.database import DatabaseSessionManager
import app.infrastructure.database as db_module
from app.main import app
from app.services.service_container import build_sql_services, get_services
from tests.sample_data import OWNER, PASSWORD, PROFILE


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def fake_manager(test_engine):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )
    return manager


@pytest.fixture
def api_settings():
    return Settings(
        max_checks_per_user=2,
        cascade_concurrency=1,
        hashing_secret="api-test-secret",
    )


@pytest.fixture
async def client(fake_manager, api_settings):
    """FastAPI test client with services wired over the test database."""
    services = build_sql_services(fake_manager, api_settings)
    app.dependency_overrides[get_services] = lambda: services

    original_manager = db_module.db_manager
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def signed_up(client):
    res = await client.post(
        "/api/v1/users",
        json={"identity": OWNER, "password": PASSWORD, **PROFILE},
    )
    assert res.status_code == 201
    return res.json()


@pytest.fixture
async def token_id(client, signed_up):
    res = await client.post(
        "/api/v1/tokens", json={"identity": OWNER, "password": PASSWORD},
    )
    assert res.status_code == 201
    return res.json()["id"]
