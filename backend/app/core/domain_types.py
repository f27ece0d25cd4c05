"""Domain Types: rich types that replace bare strings across the codebase.

Invariants:
    - Identity is exactly IDENTITY_LENGTH characters (e.g. a phone number)
    - TokenId and CheckId are RANDOM_ID_LENGTH characters from RANDOM_ID_ALPHABET
    - All closed sets of values encoded as Enums, no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (records are stored as JSON)
"""

import string
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

Identity = NewType("Identity", str)
TokenId = NewType("TokenId", str)
CheckId = NewType("CheckId", str)

IDENTITY_LENGTH = 10
RANDOM_ID_LENGTH = 20
RANDOM_ID_ALPHABET = string.ascii_lowercase + string.digits


# ─── Value Bounds ────────────────────────────────────────────────

MIN_TIMEOUT_SECONDS = 1
MAX_TIMEOUT_SECONDS = 5


# ─── Enums ───────────────────────────────────────────────────────

class Collection(str, Enum):
    """Record collections, one ResourceStore per member."""
    USERS = "users"
    TOKENS = "tokens"
    CHECKS = "checks"


class CheckProtocol(str, Enum):
    """Protocols a check may probe."""
    HTTP = "http"
    HTTPS = "https"


class CheckMethod(str, Enum):
    """HTTP methods a check may issue."""
    GET = "get"
    POST = "post"
    PUT = "put"
    DELETE = "delete"
