"""Owner Locks: per-identity mutual exclusion for read-modify-write on a User.

Invariants:
    - At most one holder per identity at a time within this process
    - Different identities never block each other
    - Locks are not reentrant: a holder must not call hold() for the same identity again

Design Decisions:
    - WeakValueDictionary: a lock disappears once no holder or waiter references it,
      so the table never grows with the number of users seen
    - In-process only: multi-worker deployments still share the per-record store
      without cross-process exclusion
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncGenerator
from weakref import WeakValueDictionary


class OwnerLocks:
    """Lazily created asyncio.Lock per owner identity."""

    def __init__(self):
        self._locks: WeakValueDictionary[str, asyncio.Lock] = WeakValueDictionary()

    def _lock_for(self, identity: str) -> asyncio.Lock:
        lock = self._locks.get(identity)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[identity] = lock
        return lock

    @asynccontextmanager
    async def hold(self, identity: str) -> AsyncGenerator[None, None]:
        lock = self._lock_for(identity)
        async with lock:
            yield

    def is_held(self, identity: str) -> bool:
        lock = self._locks.get(identity)
        return lock is not None and lock.locked()
