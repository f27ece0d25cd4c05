"""Check Field Enforcement: validates and normalizes check definitions.

Invariants:
    - All functions are PURE: no IO, no async, no side effects
    - check_* functions return FieldValidationError on violation, None on success
    - Fields are checked in CHECK_FIELDS order: first violation wins
    - A patch must carry at least one field (None means absent)

Design Decisions:
    - Pure check functions chained by order: testable without mocks
    - bool rejected where int is expected: JSON true would otherwise pass as 1
    - success_codes de-duplicated on normalize: the field has set semantics
"""

from typing import Any, Callable, Mapping

from app.core.domain_types import (
    CheckMethod, CheckProtocol, MAX_TIMEOUT_SECONDS, MIN_TIMEOUT_SECONDS,
)
from app.core.errors import FieldValidationError, NoFieldsProvidedError


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def check_protocol(value: Any) -> FieldValidationError | None:
    allowed = [p.value for p in CheckProtocol]
    if not isinstance(value, str) or value not in allowed:
        return FieldValidationError(
            f"protocol must be one of {allowed}", "protocol",
        )
    return None


def check_url(value: Any) -> FieldValidationError | None:
    if not isinstance(value, str) or not value.strip():
        return FieldValidationError("url must be a non-empty string", "url")
    return None


def check_method(value: Any) -> FieldValidationError | None:
    allowed = [m.value for m in CheckMethod]
    if not isinstance(value, str) or value not in allowed:
        return FieldValidationError(f"method must be one of {allowed}", "method")
    return None


def check_success_codes(value: Any) -> FieldValidationError | None:
    if not isinstance(value, (list, tuple, set)) or len(value) == 0:
        return FieldValidationError(
            "success_codes must be a non-empty list", "success_codes",
        )
    if not all(_is_int(code) for code in value):
        return FieldValidationError(
            "success_codes must contain only integers", "success_codes",
        )
    return None


def check_timeout_seconds(value: Any) -> FieldValidationError | None:
    if not _is_int(value) or not (
        MIN_TIMEOUT_SECONDS <= value <= MAX_TIMEOUT_SECONDS
    ):
        return FieldValidationError(
            f"timeout_seconds must be an integer between "
            f"{MIN_TIMEOUT_SECONDS} and {MAX_TIMEOUT_SECONDS}",
            "timeout_seconds",
        )
    return None


CHECK_FIELDS: dict[str, Callable[[Any], FieldValidationError | None]] = {
    "protocol": check_protocol,
    "url": check_url,
    "method": check_method,
    "success_codes": check_success_codes,
    "timeout_seconds": check_timeout_seconds,
}


def first_violation(fields: Mapping[str, Any]) -> FieldValidationError | None:
    """Run the checks for every supplied field. Returns first error or None."""
    for name, check in CHECK_FIELDS.items():
        if name in fields:
            error = check(fields[name])
            if error:
                return error
    return None


def normalize_check_fields(fields: Mapping[str, Any]) -> dict:
    """Trim url and de-duplicate success codes (order of first appearance kept)."""
    normalized = {k: v for k, v in fields.items() if k in CHECK_FIELDS}
    if "url" in normalized:
        normalized["url"] = normalized["url"].strip()
    if "success_codes" in normalized:
        normalized["success_codes"] = list(dict.fromkeys(normalized["success_codes"]))
    return normalized


def validate_check_definition(fields: Mapping[str, Any]) -> dict:
    """Full definition for create: every field required and valid."""
    for name in CHECK_FIELDS:
        if fields.get(name) is None:
            raise FieldValidationError(f"Missing required field: {name}", name)
    error = first_violation(fields)
    if error:
        raise error
    return normalize_check_fields(fields)


def validate_check_patch(fields: Mapping[str, Any]) -> dict:
    """Partial definition for update: at least one field, each one valid."""
    supplied = {
        k: v for k, v in fields.items()
        if k in CHECK_FIELDS and v is not None
    }
    if not supplied:
        raise NoFieldsProvidedError("Check")
    error = first_violation(supplied)
    if error:
        raise error
    return normalize_check_fields(supplied)
