"""SQL Resource Store: ResourceStore implementation over the records table.

Invariants:
    - Every operation runs in its own session and commits exactly one row change
    - create relies on the primary key: duplicate key → AlreadyExistsError
    - update/delete are single statements; zero rows affected → ResourceNotFoundError
    - Other SQLAlchemy failures become StorageError via DatabaseSessionManager

Design Decisions:
    - One store instance per collection, bound to a resource label for error messages
    - UPDATE/DELETE by primary key instead of read-modify-write: one statement, one row
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import delete as sql_delete, update as sql_update
from sqlalchemy.exc import IntegrityError

from app.core.domain_types import Collection
from app.core.errors import AlreadyExistsError, ResourceNotFoundError
from app.infrastructure.database import DatabaseSessionManager
from app.models.stored_record import StoredRecord

logger = logging.getLogger(__name__)


class SqlResourceStore:
    """Atomic per-key create/read/update/delete for one collection."""

    def __init__(
        self, manager: DatabaseSessionManager, collection: Collection,
        resource_type: str,
    ):
        self._manager = manager
        self._collection = collection.value
        self._resource_type = resource_type

    async def create(self, key: str, record: dict) -> None:
        async with self._manager.session() as db:
            db.add(StoredRecord(
                collection=self._collection, key=key, payload=dict(record),
            ))
            try:
                await db.commit()
            except IntegrityError:
                await db.rollback()
                raise AlreadyExistsError(self._resource_type, key)
        logger.debug(
            f"Created {self._resource_type} record",
            extra={"collection": self._collection, "operation": "create"},
        )

    async def read(self, key: str) -> dict:
        async with self._manager.session() as db:
            row = await db.get(StoredRecord, (self._collection, key))
            if row is None:
                raise ResourceNotFoundError(self._resource_type, key)
            return dict(row.payload)

    async def update(self, key: str, record: dict) -> None:
        async with self._manager.session() as db:
            result = await db.execute(
                sql_update(StoredRecord)
                .where(StoredRecord.collection == self._collection)
                .where(StoredRecord.key == key)
                .values(
                    payload=dict(record),
                    updated_at=datetime.now(timezone.utc),
                ),
            )
            if result.rowcount == 0:
                await db.rollback()
                raise ResourceNotFoundError(self._resource_type, key)
            await db.commit()

    async def delete(self, key: str) -> None:
        async with self._manager.session() as db:
            result = await db.execute(
                sql_delete(StoredRecord)
                .where(StoredRecord.collection == self._collection)
                .where(StoredRecord.key == key),
            )
            if result.rowcount == 0:
                await db.rollback()
                raise ResourceNotFoundError(self._resource_type, key)
            await db.commit()
