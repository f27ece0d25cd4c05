"""Error Hierarchy: typed, categorized exceptions for all PulseCheck failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are terminal for the call; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - ForbiddenError never says whether the token was bad or the owner was wrong

Design Decisions:
    - Single hierarchy with PulseCheckError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Consistency-repair errors carry the ids needed for manual reconciliation
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    STORAGE = "storage"
    CONSISTENCY = "consistency"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    owner_identity: str | None = None
    resource_id: str | None = None
    debug_info: dict[str, Any] | None = None


class PulseCheckError(Exception):
    """Base exception for all PulseCheck errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def details(self) -> dict | None:
        """Extra machine-readable payload; subclasses override."""
        return None

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        body = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
        }
        details = self.details()
        if details is not None:
            body["details"] = details
        return {"error": body}


# ─── Domain Errors (400-level) ──────────────────────────────────

class FieldValidationError(PulseCheckError):
    """A supplied field is malformed."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field

    def details(self) -> dict:
        return {"field": self.field}


class NoFieldsProvidedError(PulseCheckError):
    """Update called without any optional field populated."""
    def __init__(self, resource_type: str, context: ErrorContext | None = None):
        super().__init__(
            f"Missing fields to update on {resource_type}",
            "NO_FIELDS_PROVIDED", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.resource_type = resource_type


class InvalidCredentialsError(PulseCheckError):
    """Presented password does not match the stored digest."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Password did not match the specified user's stored password",
            "INVALID_CREDENTIALS", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ForbiddenError(PulseCheckError):
    """Token missing, expired, unknown, or bound to another owner."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Missing required token in header, or token is invalid",
            "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class ResourceNotFoundError(PulseCheckError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class OwnerNotFoundError(PulseCheckError):
    """The identity a token or check should belong to has no User record."""
    def __init__(self, identity: str, context: ErrorContext | None = None):
        super().__init__(
            f"Could not find the specified user '{identity}'",
            "OWNER_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.identity = identity


class AlreadyExistsError(PulseCheckError):
    """A record with the same key already exists."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' already exists",
            "ALREADY_EXISTS", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class TokenExpiredError(PulseCheckError):
    """Extension requested on a token whose expiry already passed."""
    def __init__(self, token_id: str, context: ErrorContext | None = None):
        super().__init__(
            "The token has expired, and cannot be extended",
            "TOKEN_ALREADY_EXPIRED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.token_id = token_id


class QuotaExceededError(PulseCheckError):
    """Owner already holds the maximum number of checks."""
    def __init__(self, limit: int, context: ErrorContext | None = None):
        super().__init__(
            f"The user already has the maximum number ({limit}) of checks",
            "QUOTA_EXCEEDED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.limit = limit


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageError(PulseCheckError):
    """Record store operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Storage {operation} failed: {message}",
            "STORAGE_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation


class HashingError(PulseCheckError):
    """Password digest could not be computed."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Could not hash the user's password",
            "HASHING_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )


# ─── Consistency Errors (500-level, need reconciliation) ────────

class PartialCascadeError(PulseCheckError):
    """User deleted, but some of its checks could not be deleted."""
    def __init__(
        self, identity: str, failed_check_ids: list[str],
        context: ErrorContext | None = None,
    ):
        super().__init__(
            "One or more errors encountered while attempting to delete "
            f"the checks of user '{identity}'",
            "PARTIAL_CASCADE_FAILURE", ErrorCategory.CONSISTENCY,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.identity = identity
        self.failed_check_ids = failed_check_ids

    def details(self) -> dict:
        return {"identity": self.identity, "failed_check_ids": self.failed_check_ids}


class OwnerUpdateError(PulseCheckError):
    """Check deleted, but its owner's check list could not be repaired."""
    def __init__(
        self, identity: str, check_id: str, reason: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Check '{check_id}' was deleted but user '{identity}' "
            f"could not be updated: {reason}",
            "OWNER_UPDATE_FAILURE", ErrorCategory.CONSISTENCY,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.identity = identity
        self.check_id = check_id
        self.reason = reason

    def details(self) -> dict:
        return {"identity": self.identity, "check_id": self.check_id}
