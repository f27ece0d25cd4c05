"""User Field Enforcement: identity shape and profile normalization.

Invariants:
    - All functions are PURE: no IO, no async, no side effects
    - Text fields are trimmed; empty after trimming counts as absent
    - A profile patch must carry at least one of first_name, last_name, password

Design Decisions:
    - Mirrors enforce_check_fields: raise typed errors from core, routes stay thin
"""

from typing import Any

from app.core.domain_types import IDENTITY_LENGTH, Identity
from app.core.errors import FieldValidationError, NoFieldsProvidedError

PROFILE_FIELDS = ("first_name", "last_name", "password")


def _trimmed(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def normalize_identity(value: Any) -> Identity:
    """Trim and check length; raises FieldValidationError."""
    identity = _trimmed(value)
    if len(identity) != IDENTITY_LENGTH:
        raise FieldValidationError(
            f"identity must be exactly {IDENTITY_LENGTH} characters", "identity",
        )
    return Identity(identity)


def validate_new_profile(
    first_name: Any, last_name: Any, password: Any, agreed_to_terms: Any,
) -> dict:
    """All profile fields required at signup, plus terms agreement."""
    profile = {
        "first_name": _trimmed(first_name),
        "last_name": _trimmed(last_name),
        "password": _trimmed(password),
    }
    for name in PROFILE_FIELDS:
        if not profile[name]:
            raise FieldValidationError(f"Missing required field: {name}", name)
    if agreed_to_terms is not True:
        raise FieldValidationError(
            "Terms of service must be agreed to", "agreed_to_terms",
        )
    return profile


def validate_profile_patch(fields: dict[str, Any]) -> dict:
    """Keep only supplied, non-blank profile fields."""
    patch = {
        name: _trimmed(fields.get(name))
        for name in PROFILE_FIELDS
        if _trimmed(fields.get(name))
    }
    if not patch:
        raise NoFieldsProvidedError("User")
    return patch
