"""Database Session Manager: health probe and error mapping."""

import pytest
from sqlalchemy import text

from app.core.errors import StorageError


async def test_health_check_true_on_live_engine(manager):
    assert await manager.health_check()


async def test_sqlalchemy_errors_become_storage_error(manager):
    with pytest.raises(StorageError):
        async with manager.session() as db:
            await db.execute(text("SELECT * FROM missing_table"))


async def test_health_check_false_after_failure(manager, monkeypatch):
    def broken_factory():
        raise StorageError("Connection or operational error", "execute")

    monkeypatch.setattr(manager, "_session_factory", broken_factory)
    assert not await manager.health_check()
