"""StoredRecord ORM: one keyed JSON record per (collection, key).

Invariants:
    - (collection, key) is the composite primary key: a duplicate create fails atomically
    - payload holds the full record dict as produced by core/records.py
    - No foreign keys: cross-collection links are maintained by services, not the DB

Design Decisions:
    - Single table for users, tokens and checks: the store contract is key-value,
      so relational columns would add nothing the services rely on
    - updated_at touched on every update: observability for reconciliation work
"""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StoredRecord(Base):
    """Keyed record in one collection."""
    __tablename__ = "records"

    collection: Mapped[str] = mapped_column(String(20), primary_key=True)
    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    payload: Mapped[dict] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
