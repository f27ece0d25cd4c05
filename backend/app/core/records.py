"""Domain Records: User, Token and Check as pure dataclasses with JSON record mapping.

Invariants:
    - User.check_ids behaves as a set: add_check/remove_check never duplicate an id
    - User.public_view() never includes password_hash
    - Token.owner_identity is never reassigned after construction
    - Token.account_nonce copies the nonce of the User it was issued for; a User
      re-created under the same identity gets a fresh nonce
    - Check.owner_identity names the User that created it

Design Decisions:
    - Dataclasses with to_record()/from_record(): the store only sees plain dicts,
      so any key-value backend can hold them
    - expires_at stored as ISO-8601 UTC string: JSON-safe and sortable
"""

from dataclasses import dataclass, field
from datetime import datetime

from app.core.domain_types import CheckId, Identity, TokenId


@dataclass
class User:
    """Account owning tokens and checks."""

    identity: Identity
    first_name: str
    last_name: str
    password_hash: str
    agreed_to_terms: bool = True
    check_ids: list[CheckId] = field(default_factory=list)
    account_nonce: str = ""

    def add_check(self, check_id: CheckId) -> None:
        if check_id not in self.check_ids:
            self.check_ids.append(check_id)

    def remove_check(self, check_id: str) -> bool:
        """Remove check_id; False when it was not listed."""
        if check_id not in self.check_ids:
            return False
        self.check_ids.remove(check_id)
        return True

    def public_view(self) -> dict:
        return {
            "identity": self.identity,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "agreed_to_terms": self.agreed_to_terms,
            "check_ids": list(self.check_ids),
        }

    def to_record(self) -> dict:
        return {
            **self.public_view(),
            "password_hash": self.password_hash,
            "account_nonce": self.account_nonce,
        }

    @classmethod
    def from_record(cls, record: dict) -> "User":
        check_ids = record.get("check_ids")
        return cls(
            identity=Identity(record["identity"]),
            first_name=record["first_name"],
            last_name=record["last_name"],
            password_hash=record["password_hash"],
            agreed_to_terms=bool(record.get("agreed_to_terms", False)),
            check_ids=[CheckId(c) for c in check_ids] if isinstance(check_ids, list) else [],
            account_nonce=record.get("account_nonce", ""),
        )


@dataclass
class Token:
    """Bearer credential bound to one identity until expires_at."""

    token_id: TokenId
    owner_identity: Identity
    expires_at: datetime
    account_nonce: str = ""

    def to_record(self) -> dict:
        return {
            "id": self.token_id,
            "owner_identity": self.owner_identity,
            "expires_at": self.expires_at.isoformat(),
            "account_nonce": self.account_nonce,
        }

    @classmethod
    def from_record(cls, record: dict) -> "Token":
        return cls(
            token_id=TokenId(record["id"]),
            owner_identity=Identity(record["owner_identity"]),
            expires_at=datetime.fromisoformat(record["expires_at"]),
            account_nonce=record.get("account_nonce", ""),
        )


@dataclass
class Check:
    """URL probe definition, consumed by an external monitoring loop."""

    check_id: CheckId
    owner_identity: Identity
    protocol: str
    url: str
    method: str
    success_codes: list[int]
    timeout_seconds: int

    def to_record(self) -> dict:
        return {
            "id": self.check_id,
            "owner_identity": self.owner_identity,
            "protocol": self.protocol,
            "url": self.url,
            "method": self.method,
            "success_codes": list(self.success_codes),
            "timeout_seconds": self.timeout_seconds,
        }

    @classmethod
    def from_record(cls, record: dict) -> "Check":
        return cls(
            check_id=CheckId(record["id"]),
            owner_identity=Identity(record["owner_identity"]),
            protocol=record["protocol"],
            url=record["url"],
            method=record["method"],
            success_codes=list(record["success_codes"]),
            timeout_seconds=record["timeout_seconds"],
        )
