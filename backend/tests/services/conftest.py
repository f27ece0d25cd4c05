"""Service test fixtures: services wired over in-memory stores.

Invariants:
    - Every test gets fresh stores, a fresh OwnerLocks table and a frozen clock
    - Quota is 2 unless a test rebuilds services with other settings
    - `owner` and `owner_token` give a ready signed-up user with a valid token

Design Decisions:
    - build_services() used exactly as production wiring, only the stores differ
"""

from dataclasses import dataclass
from datetime import datetime, timezone

import pytest

from app.config import Settings
from app.services.service_container import build_services
from tests.sample_data import OTHER, OWNER, PASSWORD, PROFILE
from tests.services.fake_store import FakeClock, InMemoryResourceStore


@dataclass
class Stores:
    users: InMemoryResourceStore
    tokens: InMemoryResourceStore
    checks: InMemoryResourceStore
    journal: list


@pytest.fixture
def stores():
    journal = []
    return Stores(
        users=InMemoryResourceStore("User", journal),
        tokens=InMemoryResourceStore("Token", journal),
        checks=InMemoryResourceStore("Check", journal),
        journal=journal,
    )


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def settings():
    return Settings(
        max_checks_per_user=2,
        token_ttl_seconds=3600,
        hashing_secret="test-secret",
        cascade_concurrency=4,
    )


@pytest.fixture
def make_services(stores, clock):
    def _make(settings: Settings):
        return build_services(
            stores.users, stores.tokens, stores.checks, settings, clock=clock,
        )
    return _make


@pytest.fixture
def services(make_services, settings):
    return make_services(settings)


@pytest.fixture
async def owner(services):
    return await services.users.create(OWNER, PROFILE, PASSWORD)


@pytest.fixture
async def owner_token(services, owner):
    return await services.tokens.issue(OWNER, PASSWORD)


@pytest.fixture
async def other_token(services):
    await services.users.create(OTHER, PROFILE, PASSWORD)
    return await services.tokens.issue(OTHER, PASSWORD)
