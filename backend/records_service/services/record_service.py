"""
Records Service - Record Service
=================================

What:  The five record operations, each issuing exactly one SQL statement.
How:   Receives the request's AsyncSession, executes, and maps the outcome to
       a response schema or an application exception.
Who:   Called by the route handlers in routes/records.py.

Statements:
    list_records    SELECT id, name, type FROM records ORDER BY id
    get_record      SELECT id, name, type FROM records WHERE id = :id
    create_record   INSERT INTO records (name, type) VALUES (...) RETURNING id
    replace_record  UPDATE records SET name = :name, type = :type WHERE id = :id
    delete_record   DELETE FROM records WHERE id = :id

Writes are committed right after their statement; nothing spans two statements.
Failed statements are reported immediately as DatabaseError, never retried.
"""

import logging
from typing import List

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from records_service.exceptions import DatabaseError, NotFoundError
from records_service.models.record import Record
from records_service.schemas.record import (
    RecordCreatedResponse,
    RecordPayload,
    RecordResponse,
)

logger = logging.getLogger(__name__)

# Failures while acquiring a connection or running a statement. Driver-level
# socket errors can surface as OSError before SQLAlchemy wraps them.
_STORAGE_ERRORS = (SQLAlchemyError, OSError)


class RecordService:
    """
    Stateless record operations.

    Error Handling Strategy:
        - Zero matching rows on a keyed operation → NotFoundError
        - Any storage failure → DatabaseError chained to the driver exception
        - An empty table is not an error: list_records returns []
    """

    async def list_records(self, db: AsyncSession) -> List[RecordResponse]:
        """Return every record, ordered by id."""
        try:
            result = await db.execute(select(Record).order_by(Record.id))
            records = result.scalars().all()
        except _STORAGE_ERRORS as e:
            logger.error("Unable to SELECT records: %s", e, exc_info=True)
            raise DatabaseError(
                message="Could not list records",
                context={"operation": "select", "error_type": type(e).__name__},
            ) from e

        return [RecordResponse.model_validate(record) for record in records]

    async def get_record(self, db: AsyncSession, record_id: int) -> RecordResponse:
        """
        Retrieve a single record by id.

        Raises:
            NotFoundError: No row has this id (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        try:
            result = await db.execute(select(Record).where(Record.id == record_id))
            record = result.scalar_one_or_none()
        except _STORAGE_ERRORS as e:
            logger.error("Unable to SELECT record %d: %s", record_id, e, exc_info=True)
            raise DatabaseError(
                message="Could not retrieve the record",
                context={"operation": "select", "record_id": record_id},
            ) from e

        if record is None:
            raise NotFoundError(resource="record", resource_id=record_id)

        return RecordResponse.model_validate(record)

    async def create_record(
        self, db: AsyncSession, payload: RecordPayload
    ) -> RecordCreatedResponse:
        """
        Insert a record and return the id storage generated for it.

        The payload's `id`, if any, is not part of the INSERT.
        """
        try:
            result = await db.execute(
                insert(Record)
                .values(name=payload.name, type=payload.type)
                .returning(Record.id)
            )
            new_id = result.scalar_one()
            await db.commit()
        except _STORAGE_ERRORS as e:
            logger.error("Unable to INSERT record: %s", e, exc_info=True)
            raise DatabaseError(
                message="Could not create the record",
                context={"operation": "insert", "error_type": type(e).__name__},
            ) from e

        logger.debug("Created record %d", new_id)
        return RecordCreatedResponse(id=str(new_id))

    async def replace_record(
        self, db: AsyncSession, record_id: int, payload: RecordPayload
    ) -> None:
        """
        Overwrite name and type of an existing record.

        Zero affected rows means NotFoundError, whether or not the id ever
        existed.
        """
        try:
            result = await db.execute(
                update(Record)
                .where(Record.id == record_id)
                .values(name=payload.name, type=payload.type)
                .execution_options(synchronize_session=False)
            )
            await db.commit()
        except _STORAGE_ERRORS as e:
            logger.error("Unable to UPDATE record %d: %s", record_id, e, exc_info=True)
            raise DatabaseError(
                message="Could not update the record",
                context={"operation": "update", "record_id": record_id},
            ) from e

        if result.rowcount == 0:
            raise NotFoundError(resource="record", resource_id=record_id)

    async def delete_record(self, db: AsyncSession, record_id: int) -> None:
        """Remove a record; NotFoundError when no row had this id."""
        try:
            result = await db.execute(
                delete(Record)
                .where(Record.id == record_id)
                .execution_options(synchronize_session=False)
            )
            await db.commit()
        except _STORAGE_ERRORS as e:
            logger.error("Unable to DELETE record %d: %s", record_id, e, exc_info=True)
            raise DatabaseError(
                message="Could not delete the record",
                context={"operation": "delete", "record_id": record_id},
            ) from e

        if result.rowcount == 0:
            raise NotFoundError(resource="record", resource_id=record_id)


# ── Singleton Instance ────────────────────────────────────────────────────
# Stateless; the session is passed into every call
record_service = RecordService()
