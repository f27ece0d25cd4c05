"""Service Container: explicit wiring of stores, policies and services.

Invariants:
    - One ResourceStore per collection (users, tokens, checks)
    - One OwnerLocks table shared by UserDirectory and CheckRegistry
    - get_services() raises until init_services() ran (FastAPI lifespan)

Design Decisions:
    - Explicit constructor calls over a DI framework: every dependency visible in one place
    - build_services takes stores, so tests wire in-memory fakes the same way
    - Module-level singleton mirrors db_manager
"""

from dataclasses import dataclass

from app.config import Settings
from app.core.domain_types import Collection
from app.core.repository_protocols import PasswordHasher, ResourceStore
from app.infrastructure.database import DatabaseSessionManager
from app.infrastructure.password_hasher import HmacPasswordHasher
from app.infrastructure.record_store import SqlResourceStore
from app.services.authorization_gate import AuthorizationGate
from app.services.check_registry import CheckRegistry
from app.services.owner_locks import OwnerLocks
from app.services.token_authority import Clock, TokenAuthority, utc_now
from app.services.user_directory import UserDirectory


@dataclass
class Services:
    tokens: TokenAuthority
    gate: AuthorizationGate
    users: UserDirectory
    checks: CheckRegistry


def build_services(
    users_store: ResourceStore,
    tokens_store: ResourceStore,
    checks_store: ResourceStore,
    settings: Settings,
    hasher: PasswordHasher | None = None,
    clock: Clock = utc_now,
) -> Services:
    hasher = hasher or HmacPasswordHasher(settings.hashing_secret)
    locks = OwnerLocks()
    tokens = TokenAuthority(
        tokens_store, users_store, hasher,
        ttl_seconds=settings.token_ttl_seconds, clock=clock,
    )
    gate = AuthorizationGate(tokens)
    checks = CheckRegistry(
        checks_store, users_store, gate, locks,
        max_checks_per_user=settings.max_checks_per_user,
    )
    users = UserDirectory(
        users_store, checks, gate, hasher, locks,
        cascade_concurrency=settings.cascade_concurrency,
    )
    return Services(tokens=tokens, gate=gate, users=users, checks=checks)


def build_sql_services(
    manager: DatabaseSessionManager, settings: Settings,
) -> Services:
    return build_services(
        SqlResourceStore(manager, Collection.USERS, "User"),
        SqlResourceStore(manager, Collection.TOKENS, "Token"),
        SqlResourceStore(manager, Collection.CHECKS, "Check"),
        settings,
    )


# Singleton (initialized on startup)
_services: Services | None = None


def init_services(manager: DatabaseSessionManager, settings: Settings) -> Services:
    global _services
    _services = build_sql_services(manager, settings)
    return _services


def get_services() -> Services:
    """FastAPI dependency for the wired services."""
    if _services is None:
        raise RuntimeError("Services not initialized")
    return _services
