"""User Directory: signup, profile reads/updates and account removal with cascade.

Invariants:
    - Identity is unique: create reads first, and the store's atomic create
      rejects a racing duplicate
    - No returned projection contains password_hash
    - Every created User gets a fresh account_nonce, so tokens issued to a deleted
      account never authorize a later account with the same identity
    - get/update/delete require a token authorized for that identity
    - delete removes the User first, then every check in the pre-deletion snapshot;
      the User is NOT restored if some check deletions fail

Design Decisions:
    - Best-effort cascade reported as PartialCascadeError with the failed ids
    - Cascade runs concurrently, bounded by a semaphore
    - Profile updates take the owner lock so they cannot overwrite a concurrent
      check append/removal on the same User record
"""

import asyncio
import logging
from typing import Any, Mapping

from app.core.enforce_user_fields import (
    normalize_identity, validate_new_profile, validate_profile_patch,
)
from app.core.errors import (
    AlreadyExistsError, PartialCascadeError, PulseCheckError, ResourceNotFoundError,
)
from app.core.records import User
from app.core.repository_protocols import PasswordHasher, ResourceStore
from app.core.token_policy import generate_random_id
from app.services.authorization_gate import AuthorizationGate
from app.services.check_registry import CheckRegistry
from app.services.owner_locks import OwnerLocks

logger = logging.getLogger(__name__)


class UserDirectory:
    """User records, identity uniqueness and cascade deletion."""

    def __init__(
        self,
        users: ResourceStore,
        checks: CheckRegistry,
        gate: AuthorizationGate,
        hasher: PasswordHasher,
        locks: OwnerLocks,
        cascade_concurrency: int = 8,
    ):
        self._users = users
        self._checks = checks
        self._gate = gate
        self._hasher = hasher
        self._locks = locks
        self._cascade_concurrency = cascade_concurrency

    async def create(
        self, identity: str, profile: Mapping[str, Any], password: str,
    ) -> dict:
        identity = normalize_identity(identity)
        fields = validate_new_profile(
            profile.get("first_name"), profile.get("last_name"),
            password, profile.get("agreed_to_terms"),
        )
        try:
            await self._users.read(identity)
        except ResourceNotFoundError:
            pass
        else:
            raise AlreadyExistsError("User", identity)

        user = User(
            identity=identity,
            first_name=fields["first_name"],
            last_name=fields["last_name"],
            password_hash=self._hasher.digest(fields["password"]),
            agreed_to_terms=True,
            account_nonce=generate_random_id(),
        )
        await self._users.create(identity, user.to_record())
        logger.info("User created", extra={"owner_identity": identity})
        return user.public_view()

    async def get(self, identity: str, caller_token_id: str | None) -> dict:
        await self._gate.require(caller_token_id, identity)
        return (await self._load(identity)).public_view()

    async def update(
        self, identity: str, caller_token_id: str | None,
        partial_profile: Mapping[str, Any],
    ) -> dict:
        patch = validate_profile_patch(dict(partial_profile))
        await self._gate.require(caller_token_id, identity)
        async with self._locks.hold(identity):
            user = await self._load(identity)
            if "first_name" in patch:
                user.first_name = patch["first_name"]
            if "last_name" in patch:
                user.last_name = patch["last_name"]
            if "password" in patch:
                user.password_hash = self._hasher.digest(patch["password"])
            await self._users.update(user.identity, user.to_record())
        return user.public_view()

    async def delete(self, identity: str, caller_token_id: str | None) -> None:
        await self._gate.require(caller_token_id, identity)
        async with self._locks.hold(identity):
            user = await self._load(identity)
            await self._users.delete(user.identity)
        logger.info("User deleted", extra={"owner_identity": user.identity})

        failed = await self._cascade_delete(list(user.check_ids))
        if failed:
            logger.error(
                "Cascade left checks behind after user deletion",
                extra={"owner_identity": user.identity, "failed_check_ids": failed},
            )
            raise PartialCascadeError(user.identity, failed)

    async def _load(self, identity: str) -> User:
        return User.from_record(await self._users.read(identity))

    async def _cascade_delete(self, check_ids: list[str]) -> list[str]:
        """Delete every check; returns the ids that could not be deleted."""
        semaphore = asyncio.Semaphore(self._cascade_concurrency)

        async def _delete_one(check_id: str) -> str | None:
            async with semaphore:
                try:
                    await self._checks.delete_without_authorization(check_id)
                except PulseCheckError as e:
                    logger.warning(
                        f"Cascade delete failed: {e.message}",
                        extra={"check_id": check_id, "error_code": e.code},
                    )
                    return check_id
                return None

        results = await asyncio.gather(*(_delete_one(c) for c in check_ids))
        return [check_id for check_id in results if check_id is not None]
