"""Check Registry: owns Check records and the User ↔ Check back-references.

Invariants:
    - create persists the Check BEFORE appending its id to the owner: a crash in
      between leaves an orphan Check, never a check id pointing at nothing
    - Quota is checked against the owner's check list under the owner lock
    - get/update/delete go through AuthorizationGate with the check's owner
    - A check id missing from its owner's list on delete is OwnerUpdateError,
      not an ordinary not-found
    - delete_without_authorization only removes the Check record; it exists for
      UserDirectory's cascade, where the owner record is already gone

Design Decisions:
    - Field validation runs before any IO so NoFieldsProvided/ValidationError never
      depend on resource state
    - Per-owner lock guards read → quota → create → append and the owner detach,
      closing the in-process quota race
    - No rollback of a committed Check: partial completion is reported, not undone
"""

import logging
from typing import Any, Mapping

from app.core.domain_types import CheckId, Identity
from app.core.enforce_check_fields import (
    validate_check_definition, validate_check_patch,
)
from app.core.errors import (
    OwnerNotFoundError, OwnerUpdateError, QuotaExceededError,
    ResourceNotFoundError, StorageError,
)
from app.core.records import Check, User
from app.core.repository_protocols import ResourceStore
from app.core.token_policy import generate_random_id
from app.services.authorization_gate import AuthorizationGate
from app.services.owner_locks import OwnerLocks

logger = logging.getLogger(__name__)


class CheckRegistry:
    """Check CRUD with owner quota and bidirectional owner links."""

    def __init__(
        self,
        checks: ResourceStore,
        users: ResourceStore,
        gate: AuthorizationGate,
        locks: OwnerLocks,
        max_checks_per_user: int,
    ):
        self._checks = checks
        self._users = users
        self._gate = gate
        self._locks = locks
        self._max_checks = max_checks_per_user

    async def create(
        self, owner_identity: str, definition: Mapping[str, Any],
    ) -> Check:
        fields = validate_check_definition(definition)
        async with self._locks.hold(owner_identity):
            try:
                owner = User.from_record(await self._users.read(owner_identity))
            except ResourceNotFoundError:
                raise OwnerNotFoundError(owner_identity)
            if len(owner.check_ids) >= self._max_checks:
                raise QuotaExceededError(self._max_checks)

            check = Check(
                check_id=CheckId(generate_random_id()),
                owner_identity=owner.identity,
                **fields,
            )
            await self._checks.create(check.check_id, check.to_record())

            owner.add_check(check.check_id)
            try:
                await self._users.update(owner.identity, owner.to_record())
            except (ResourceNotFoundError, StorageError) as e:
                logger.error(
                    "Check persisted but owner update failed; check is orphaned",
                    extra={"owner_identity": owner.identity, "check_id": check.check_id},
                )
                raise StorageError(
                    f"Could not update the user with the new check '{check.check_id}'",
                    "update",
                ) from e

        logger.info(
            "Check created",
            extra={"owner_identity": owner.identity, "check_id": check.check_id},
        )
        return check

    async def get(self, check_id: str, caller_token_id: str | None) -> Check:
        check = Check.from_record(await self._checks.read(check_id))
        await self._gate.require(caller_token_id, check.owner_identity)
        return check

    async def update(
        self, check_id: str, caller_token_id: str | None,
        partial_fields: Mapping[str, Any],
    ) -> Check:
        fields = validate_check_patch(partial_fields)
        check = await self.get(check_id, caller_token_id)
        for name, value in fields.items():
            setattr(check, name, value)
        await self._checks.update(check.check_id, check.to_record())
        return check

    async def delete(self, check_id: str, caller_token_id: str | None) -> None:
        check = await self.get(check_id, caller_token_id)
        await self.delete_without_authorization(check.check_id)
        await self._detach_from_owner(check.owner_identity, check.check_id)
        logger.info(
            "Check deleted",
            extra={"owner_identity": check.owner_identity, "check_id": check.check_id},
        )

    async def delete_without_authorization(self, check_id: str) -> None:
        """Remove the Check record only. Caller has already established ownership."""
        await self._checks.delete(check_id)

    async def _detach_from_owner(self, owner_identity: Identity, check_id: CheckId) -> None:
        async with self._locks.hold(owner_identity):
            try:
                owner = User.from_record(await self._users.read(owner_identity))
            except ResourceNotFoundError:
                raise OwnerUpdateError(
                    owner_identity, check_id, "owner record not found",
                )
            if not owner.remove_check(check_id):
                logger.error(
                    "Deleted check was missing from its owner's check list",
                    extra={"owner_identity": owner_identity, "check_id": check_id},
                )
                raise OwnerUpdateError(
                    owner_identity, check_id,
                    "check id missing from the owner's check list",
                )
            try:
                await self._users.update(owner.identity, owner.to_record())
            except (ResourceNotFoundError, StorageError) as e:
                raise OwnerUpdateError(
                    owner_identity, check_id, "owner record could not be saved",
                ) from e
