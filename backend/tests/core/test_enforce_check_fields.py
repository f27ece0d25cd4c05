"""Check Field Enforcement: per-field rules, first-violation order, patch semantics."""

import pytest

from app.core.enforce_check_fields import (
    check_method, check_protocol, check_success_codes, check_timeout_seconds,
    check_url, first_violation, validate_check_patch, validate_check_definition,
)
from app.core.errors import FieldValidationError, NoFieldsProvidedError

VALID = {
    "protocol": "http",
    "url": "example.com",
    "method": "delete",
    "success_codes": [200],
    "timeout_seconds": 1,
}


def test_valid_definition_passes_every_check():
    assert first_violation(VALID) is None


@pytest.mark.parametrize("value", ["http", "https"])
def test_protocol_accepts_enum_members(value):
    assert check_protocol(value) is None


@pytest.mark.parametrize("value", ["HTTP", "ftp", "", None, 1])
def test_protocol_rejects_others(value):
    assert check_protocol(value).field == "protocol"


@pytest.mark.parametrize("value", ["get", "post", "put", "delete"])
def test_method_accepts_enum_members(value):
    assert check_method(value) is None


def test_method_rejects_head():
    assert check_method("head").field == "method"


def test_url_must_not_be_blank():
    assert check_url("  ") is not None
    assert check_url(42) is not None
    assert check_url("a.io") is None


@pytest.mark.parametrize("value", [[], None, "200", [True], [200, "x"]])
def test_success_codes_rejects_bad_values(value):
    assert check_success_codes(value).field == "success_codes"


@pytest.mark.parametrize("value", [1, 3, 5])
def test_timeout_accepts_bounds(value):
    assert check_timeout_seconds(value) is None


@pytest.mark.parametrize("value", [0, 6, -1, 1.0, "2", False])
def test_timeout_rejects_out_of_range_or_non_int(value):
    assert check_timeout_seconds(value).field == "timeout_seconds"


def test_first_violation_follows_field_order():
    error = first_violation({**VALID, "method": "x", "protocol": "y"})
    assert error.field == "protocol"


def test_definition_requires_every_field():
    definition = dict(VALID)
    del definition["url"]
    with pytest.raises(FieldValidationError) as exc:
        validate_check_definition(definition)
    assert exc.value.field == "url"


def test_definition_normalizes_url_and_codes():
    fields = validate_check_definition(
        {**VALID, "url": " a.io/x ", "success_codes": [301, 200, 301]},
    )
    assert fields["url"] == "a.io/x"
    assert fields["success_codes"] == [301, 200]


def test_definition_drops_unknown_keys():
    fields = validate_check_definition({**VALID, "owner_identity": "5550000000"})
    assert "owner_identity" not in fields


@pytest.mark.parametrize("patch", [{}, {"protocol": None}, {"colour": "red"}])
def test_patch_without_fields_fails(patch):
    with pytest.raises(NoFieldsProvidedError):
        validate_check_patch(patch)


def test_patch_keeps_only_supplied_fields():
    assert validate_check_patch({"timeout_seconds": 4, "url": None}) == {
        "timeout_seconds": 4,
    }


def test_patch_revalidates_supplied_field():
    with pytest.raises(FieldValidationError):
        validate_check_patch({"success_codes": []})
