"""Token Authority: issues, reads, extends, revokes and verifies bearer tokens.

Invariants:
    - A token's owner_identity is set once at issue and never rewritten
    - issue requires an existing User and a matching password digest
    - extend refuses expired tokens; they must be reissued
    - verify never raises; malformed ids return False without a storage lookup
    - A token only verifies against the account it was issued for: deleting a
      User and signing up again under the same identity orphans the old tokens

Design Decisions:
    - Clock injected: expiry behaviour testable without sleeping
    - hmac.compare_digest for the password comparison: constant-time
    - Expired tokens are not garbage-collected; every read path re-checks expiry
"""

import hmac
import logging
from datetime import datetime, timezone
from typing import Callable

from app.core.domain_types import Identity, TokenId
from app.core.enforce_user_fields import normalize_identity
from app.core.errors import (
    InvalidCredentialsError, OwnerNotFoundError, PulseCheckError,
    ResourceNotFoundError, TokenExpiredError,
)
from app.core.records import Token, User
from app.core.repository_protocols import PasswordHasher, ResourceStore
from app.core.token_policy import (
    compute_expiry, generate_random_id, is_expired, is_well_formed_id,
    token_grants,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TokenAuthority:
    """Bearer token lifecycle bound to one owner identity."""

    def __init__(
        self,
        tokens: ResourceStore,
        users: ResourceStore,
        hasher: PasswordHasher,
        ttl_seconds: int = 3600,
        clock: Clock = utc_now,
    ):
        self._tokens = tokens
        self._users = users
        self._hasher = hasher
        self._ttl_seconds = ttl_seconds
        self._clock = clock

    async def issue(self, identity: str, presented_password: str) -> Token:
        """Check credentials and persist a fresh token valid for one TTL."""
        identity = normalize_identity(identity)
        try:
            user = User.from_record(await self._users.read(identity))
        except ResourceNotFoundError:
            raise OwnerNotFoundError(identity)

        password = (
            presented_password.strip()
            if isinstance(presented_password, str) else ""
        )
        if not password:
            raise InvalidCredentialsError()
        if not hmac.compare_digest(
            self._hasher.digest(password), user.password_hash,
        ):
            raise InvalidCredentialsError()

        token = Token(
            token_id=TokenId(generate_random_id()),
            owner_identity=user.identity,
            expires_at=compute_expiry(self._clock(), self._ttl_seconds),
            account_nonce=user.account_nonce,
        )
        await self._tokens.create(token.token_id, token.to_record())
        logger.info("Token issued", extra={"owner_identity": user.identity})
        return token

    async def fetch(self, token_id: str) -> Token:
        if not is_well_formed_id(token_id):
            raise ResourceNotFoundError("Token", str(token_id))
        return Token.from_record(await self._tokens.read(token_id))

    async def extend(self, token_id: str) -> Token:
        """Push expiry to now + TTL; an expired token stays dead."""
        token = await self.fetch(token_id)
        now = self._clock()
        if is_expired(token, now):
            raise TokenExpiredError(token_id)
        token.expires_at = compute_expiry(now, self._ttl_seconds)
        await self._tokens.update(token.token_id, token.to_record())
        return token

    async def revoke(self, token_id: str) -> None:
        if not is_well_formed_id(token_id):
            raise ResourceNotFoundError("Token", str(token_id))
        await self._tokens.delete(token_id)

    async def verify(self, token_id: str | None, expected_owner: Identity | str) -> bool:
        """Single authorization primitive: exists, unexpired, bound to expected_owner."""
        if not expected_owner or not is_well_formed_id(token_id):
            return False
        try:
            token = Token.from_record(await self._tokens.read(token_id))
            if token.owner_identity != expected_owner:
                return False
            owner = User.from_record(await self._users.read(expected_owner))
        except ResourceNotFoundError:
            return False
        except PulseCheckError as e:
            logger.warning(
                f"Lookup failed during verify: {e.message}",
                extra={"error_code": e.code},
            )
            return False
        except (KeyError, TypeError, ValueError):
            logger.warning("Malformed token or user record rejected during verify")
            return False
        return token_grants(token, owner, self._clock())