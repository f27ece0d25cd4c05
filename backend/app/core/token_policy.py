"""Token Policy: pure rules for bearer token shape, validity and expiry.

Invariants:
    - A token is valid iff it exists, expires_at > now, and it is bound to the
      expected owner and to that owner's current account_nonce
    - Malformed ids are rejected before any storage lookup
    - Expiry is always now + ttl; an expired token cannot be revived

Design Decisions:
    - now is a parameter, never read from the clock here: deterministic tests
    - Ids drawn with secrets.choice over a 36-symbol alphabet: ~103 bits at 20 chars
"""

import secrets
from datetime import datetime, timedelta

from app.core.domain_types import RANDOM_ID_ALPHABET, RANDOM_ID_LENGTH
from app.core.records import Token, User


def generate_random_id(length: int = RANDOM_ID_LENGTH) -> str:
    """High-entropy id used for tokens and checks."""
    return "".join(secrets.choice(RANDOM_ID_ALPHABET) for _ in range(length))


def is_well_formed_id(value: object) -> bool:
    return (
        isinstance(value, str)
        and len(value) == RANDOM_ID_LENGTH
        and all(ch in RANDOM_ID_ALPHABET for ch in value)
    )


def compute_expiry(now: datetime, ttl_seconds: int) -> datetime:
    return now + timedelta(seconds=ttl_seconds)


def is_expired(token: Token, now: datetime) -> bool:
    return token.expires_at <= now


def token_grants(token: Token, owner: User, now: datetime) -> bool:
    """Unexpired and issued for this very account, not an earlier one with the same identity."""
    return (
        token.owner_identity == owner.identity
        and token.account_nonce == owner.account_nonce
        and not is_expired(token, now)
    )
