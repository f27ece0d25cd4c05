"""Owner Locks: per-identity exclusion without cross-identity blocking."""

import asyncio

from app.services.owner_locks import OwnerLocks


async def test_same_identity_is_serialized():
    locks = OwnerLocks()
    order = []

    async def _worker(name: str):
        async with locks.hold("5551234567"):
            order.append(f"{name}-in")
            await asyncio.sleep(0)
            order.append(f"{name}-out")

    await asyncio.gather(_worker("a"), _worker("b"))
    assert order == ["a-in", "a-out", "b-in", "b-out"]


async def test_different_identities_do_not_block():
    locks = OwnerLocks()
    async with locks.hold("5551234567"):
        async with locks.hold("5559876543"):
            assert locks.is_held("5551234567")
            assert locks.is_held("5559876543")


async def test_lock_released_after_block():
    locks = OwnerLocks()
    async with locks.hold("5551234567"):
        pass
    assert not locks.is_held("5551234567")
