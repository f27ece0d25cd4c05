"""Infrastructure test fixtures: DatabaseSessionManager over in-memory SQLite.

Design Decisions:
    - Manager built with __new__ and handed the test engine, so no pool
      arguments or env settings are involved
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from app.db.base import Base
from app.infrastructure.database import DatabaseSessionManager
import app.models  # noqa: F401  (registers StoredRecord on Base.metadata)


@pytest.fixture
async def test_engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def manager(test_engine):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )
    return manager
