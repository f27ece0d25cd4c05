"""Boundary Protocols: contracts between core and shell.

Invariants:
    - Core NEVER imports from shell: dependency arrows point inward only
    - ResourceStore is atomic per record only; nothing spans two keys
    - create raises AlreadyExistsError if the key exists
    - read/update/delete raise ResourceNotFoundError if the key is absent
    - Any other backend failure surfaces as StorageError

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO; services await them in sequence
    - Records are plain dicts: the store never knows about User/Token/Check
"""

from typing import Protocol


class ResourceStore(Protocol):
    """Keyed record persistence for one collection: implemented by shell."""
    async def create(self, key: str, record: dict) -> None: ...
    async def read(self, key: str) -> dict: ...
    async def update(self, key: str, record: dict) -> None: ...
    async def delete(self, key: str) -> None: ...


class PasswordHasher(Protocol):
    """One-way, deterministic digest. Raises HashingError on internal failure."""
    def digest(self, plaintext: str) -> str: ...
