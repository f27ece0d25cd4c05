"""Request schemas: boundary shape checks before services run.

Invariants:
    - identity is trimmed, then must be exactly 10 characters
    - success_codes and timeout_seconds reject booleans and numeric strings
    - Token extension requires extend == true
"""

import pytest
from pydantic import ValidationError

from app.schemas.check import CheckCreate, CheckUpdate
from app.schemas.token import TokenCreate, TokenExtend
from app.schemas.user import UserCreate, UserUpdate


# --- Users --------------------------------------------------------------------

def test_user_create_trims_identity():
    user = UserCreate(
        identity=" 5551234567 ", first_name="Ada", last_name="Lovelace",
        password="pw", agreed_to_terms=True,
    )
    assert user.identity == "5551234567"


def test_user_create_rejects_long_identity():
    with pytest.raises(ValidationError):
        UserCreate(
            identity="55512345678", first_name="Ada", last_name="Lovelace",
            password="pw", agreed_to_terms=True,
        )


def test_user_update_dump_omits_absent_fields():
    assert UserUpdate(last_name="Byron").model_dump(exclude_none=True) == {
        "last_name": "Byron",
    }


# --- Checks -------------------------------------------------------------------

def test_check_create_rejects_boolean_codes():
    with pytest.raises(ValidationError):
        CheckCreate(
            protocol="http", url="a.io", method="get",
            success_codes=[True], timeout_seconds=1,
        )


def test_check_create_rejects_string_timeout():
    with pytest.raises(ValidationError):
        CheckCreate(
            protocol="http", url="a.io", method="get",
            success_codes=[200], timeout_seconds="3",
        )


def test_check_update_all_optional():
    assert CheckUpdate().model_dump(exclude_none=True) == {}


# --- Tokens -------------------------------------------------------------------

def test_token_create_requires_password():
    with pytest.raises(ValidationError):
        TokenCreate(identity="5551234567", password="")


def test_token_extend_requires_true():
    assert TokenExtend(extend=True).extend is True
    with pytest.raises(ValidationError):
        TokenExtend(extend=False)
