"""User Field Enforcement: identity length, signup profile, profile patch."""

import pytest

from app.core.enforce_user_fields import (
    normalize_identity, validate_new_profile, validate_profile_patch,
)
from app.core.errors import FieldValidationError, NoFieldsProvidedError


def test_identity_is_trimmed():
    assert normalize_identity(" 5551234567 ") == "5551234567"


@pytest.mark.parametrize("value", ["555123456", "55512345678", "", None, 5551234567])
def test_identity_must_be_ten_characters(value):
    with pytest.raises(FieldValidationError):
        normalize_identity(value)


def test_new_profile_trims_fields():
    assert validate_new_profile(" Ada ", "Lovelace", " pw ", True) == {
        "first_name": "Ada", "last_name": "Lovelace", "password": "pw",
    }


def test_new_profile_requires_names_and_password():
    with pytest.raises(FieldValidationError) as exc:
        validate_new_profile("Ada", "   ", "pw", True)
    assert exc.value.field == "last_name"


@pytest.mark.parametrize("agreed", [False, None, "yes", 1])
def test_new_profile_requires_literal_agreement(agreed):
    with pytest.raises(FieldValidationError) as exc:
        validate_new_profile("Ada", "Lovelace", "pw", agreed)
    assert exc.value.field == "agreed_to_terms"


def test_patch_ignores_blank_and_unknown_fields():
    assert validate_profile_patch(
        {"first_name": " Grace ", "last_name": "", "identity": "x"},
    ) == {"first_name": "Grace"}


def test_empty_patch_fails():
    with pytest.raises(NoFieldsProvidedError):
        validate_profile_patch({"first_name": None})
