"""
Transaction Ledger Backend — Entity Store
==========================================

What:  Create / find / list / update / delete for one ORM model.
Why:   Both entities need the same five operations with the same error
       translation; writing them once keeps the two services about their
       own rules only.
How:   Each call takes the request's AsyncSession. Writes are flushed, not
       committed (get_db_session commits at the end of the request), so a
       constraint violation surfaces here and becomes a StoreError.

Identifier handling:
    Ids arrive from URLs and bodies as strings. A string that is not a UUID
    cannot name a record, so it is treated exactly like an unknown id
    (lookups return None) rather than as a separate error class.
"""

import logging
import uuid
from typing import Any, Dict, Generic, Iterable, List, Mapping, Optional, Type, TypeVar, Union

from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from txledger.database import Base
from txledger.exceptions import StoreError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

RawId = Union[str, uuid.UUID, None]


def parse_identifier(raw: RawId) -> Optional[uuid.UUID]:
    """Return the UUID named by `raw`, or None if it is not a valid identifier."""
    if isinstance(raw, uuid.UUID):
        return raw
    if not isinstance(raw, str):
        return None
    try:
        return uuid.UUID(raw)
    except ValueError:
        return None


def _driver_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


class EntityStore(Generic[ModelT]):
    """
    Persistence operations for a single model class.

    All mutations touch exactly one row; there are no multi-row transactions
    and no cascades.
    """

    def __init__(self, model: Type[ModelT]):
        self.model = model

    def _fail(self, operation: str, exc: SQLAlchemyError, record_id: Any = None) -> StoreError:
        message = _driver_message(exc)
        logger.error(
            "%s.%s failed: %s", self.model.__name__, operation, message, exc_info=True
        )
        context = {"model": self.model.__name__, "operation": operation}
        if record_id is not None:
            context["record_id"] = str(record_id)
        return StoreError(message=message, context=context)

    async def create(self, db: AsyncSession, values: Mapping[str, Any]) -> ModelT:
        record = self.model(**values)
        try:
            db.add(record)
            await db.flush()
            await db.refresh(record)
        except SQLAlchemyError as exc:
            raise self._fail("create", exc) from exc
        return record

    async def find_by_id(self, db: AsyncSession, raw_id: RawId) -> Optional[ModelT]:
        record_id = parse_identifier(raw_id)
        if record_id is None:
            return None
        try:
            return await db.get(self.model, record_id)
        except SQLAlchemyError as exc:
            raise self._fail("find_by_id", exc, record_id) from exc

    async def find_by_ids(
        self, db: AsyncSession, ids: Iterable[Optional[uuid.UUID]]
    ) -> Dict[uuid.UUID, ModelT]:
        wanted = {i for i in ids if i is not None}
        if not wanted:
            return {}
        try:
            result = await db.execute(select(self.model).where(self.model.id.in_(wanted)))
        except SQLAlchemyError as exc:
            raise self._fail("find_by_ids", exc) from exc
        return {record.id: record for record in result.scalars().all()}

    async def find_all_sorted(self, db: AsyncSession) -> List[ModelT]:
        """All records, newest created first."""
        try:
            result = await db.execute(
                select(self.model).order_by(desc(self.model.created_at))
            )
        except SQLAlchemyError as exc:
            raise self._fail("find_all_sorted", exc) from exc
        return list(result.scalars().all())

    async def update_by_id(
        self, db: AsyncSession, raw_id: RawId, values: Mapping[str, Any]
    ) -> Optional[ModelT]:
        """
        Apply only the given keys to the record and return its new state.

        An empty mapping leaves the record untouched. Returns None when the
        id does not resolve.
        """
        record = await self.find_by_id(db, raw_id)
        if record is None:
            return None
        if not values:
            return record
        for key, value in values.items():
            setattr(record, key, value)
        try:
            await db.flush()
            await db.refresh(record)
        except SQLAlchemyError as exc:
            raise self._fail("update_by_id", exc, record.id) from exc
        return record

    async def delete_by_id(self, db: AsyncSession, raw_id: RawId) -> bool:
        record = await self.find_by_id(db, raw_id)
        if record is None:
            return False
        try:
            await db.delete(record)
            await db.flush()
        except SQLAlchemyError as exc:
            raise self._fail("delete_by_id", exc, record.id) from exc
        return True
