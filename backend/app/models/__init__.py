"""ORM Models: SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)
    - Users, tokens and checks share the keyed records table

Design Decisions:
    - All models imported here so Base.metadata is complete before create_all
      or Alembic autogenerate runs
"""

from app.models.stored_record import StoredRecord  # noqa: F401
