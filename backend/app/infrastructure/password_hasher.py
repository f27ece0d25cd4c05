"""Password Hasher: HMAC-SHA256 digest keyed by the configured secret.

Invariants:
    - Deterministic: same secret + plaintext → same hex digest
    - Empty or non-string input raises HashingError (never returns a falsy digest)

Design Decisions:
    - hmac + hashlib from the standard library: keyed digest without a native dependency
"""

import hashlib
import hmac

from app.core.errors import HashingError


class HmacPasswordHasher:
    """Keyed one-way digest for stored passwords."""

    def __init__(self, secret: str):
        self._key = secret.encode("utf-8")

    def digest(self, plaintext: str) -> str:
        if not isinstance(plaintext, str) or not plaintext:
            raise HashingError()
        try:
            return hmac.new(
                self._key, plaintext.encode("utf-8"), hashlib.sha256,
            ).hexdigest()
        except (TypeError, ValueError, UnicodeError) as e:
            raise HashingError() from e
