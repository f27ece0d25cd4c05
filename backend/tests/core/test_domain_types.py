"""Domain Types: id constants and enum members.

Tests:
    - Random id alphabet and length match the token/check id shape
    - Enums serialize to their lowercase wire values
"""

from app.core.domain_types import (
    IDENTITY_LENGTH, MAX_TIMEOUT_SECONDS, MIN_TIMEOUT_SECONDS,
    RANDOM_ID_ALPHABET, RANDOM_ID_LENGTH,
    CheckMethod, CheckProtocol, Collection,
)


def test_id_constants():
    assert IDENTITY_LENGTH == 10
    assert RANDOM_ID_LENGTH == 20
    assert RANDOM_ID_ALPHABET == "abcdefghijklmnopqrstuvwxyz0123456789"


def test_timeout_bounds():
    assert (MIN_TIMEOUT_SECONDS, MAX_TIMEOUT_SECONDS) == (1, 5)


def test_protocol_members():
    assert {p.value for p in CheckProtocol} == {"http", "https"}


def test_method_members():
    assert {m.value for m in CheckMethod} == {"get", "post", "put", "delete"}


def test_collections_are_strings():
    assert Collection.USERS.value == "users"
    assert Collection.CHECKS == "checks"
