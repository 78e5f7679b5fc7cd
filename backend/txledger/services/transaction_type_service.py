"""
Transaction Ledger Backend — TransactionType Service
=====================================================

What:  Business logic for transaction types: validate → store → format.
Who:   Called by the /transactions-type route handlers.

Operations:
    create_type()   POST   validate (create schema) → insert → raw record
    list_types()    GET    all types newest first → [{id, name, bank}]
    get_type()      GET    raw record or NotFoundError
    update_type()   PUT    validate (update schema) → partial update → raw record
    delete_type()   DELETE remove; transactions referencing it are kept

TransactionTypeService is stateless; the session arrives with each call.
"""

import logging
from typing import Any, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from txledger.exceptions import NotFoundError
from txledger.models.transaction_type import TransactionType
from txledger.schemas.transaction_type import (
    TransactionTypeCreate,
    TransactionTypeOption,
    TransactionTypeRecord,
    TransactionTypeUpdate,
)
from txledger.services.formatting import format_type_option, to_type_record
from txledger.services.integrity import TRANSACTION_TYPE_RESOURCE
from txledger.services.store import EntityStore
from txledger.services.validation import CREATE, UPDATE, PayloadValidator

logger = logging.getLogger(__name__)


class TransactionTypeService:
    def __init__(
        self,
        store: Optional[EntityStore[TransactionType]] = None,
        validator: Optional[PayloadValidator] = None,
    ):
        self.store = store or EntityStore(TransactionType)
        self.validator = validator or PayloadValidator(
            create=TransactionTypeCreate, update=TransactionTypeUpdate
        )

    async def create_type(self, db: AsyncSession, payload: Any) -> TransactionTypeRecord:
        values = self.validator.validate(CREATE, payload)
        transaction_type = await self.store.create(db, values)
        logger.info("Transaction type created: %s (%s)", transaction_type.id, transaction_type.name)
        return to_type_record(transaction_type)

    async def list_types(self, db: AsyncSession) -> List[TransactionTypeOption]:
        types = await self.store.find_all_sorted(db)
        return [format_type_option(t) for t in types]

    async def get_type(self, db: AsyncSession, type_id: str) -> TransactionTypeRecord:
        transaction_type = await self.store.find_by_id(db, type_id)
        if transaction_type is None:
            raise NotFoundError(resource=TRANSACTION_TYPE_RESOURCE, resource_id=type_id)
        return to_type_record(transaction_type)

    async def update_type(
        self, db: AsyncSession, type_id: str, payload: Any
    ) -> TransactionTypeRecord:
        values = self.validator.validate(UPDATE, payload)
        transaction_type = await self.store.update_by_id(db, type_id, values)
        if transaction_type is None:
            raise NotFoundError(resource=TRANSACTION_TYPE_RESOURCE, resource_id=type_id)
        logger.info("Transaction type %s updated: %s", type_id, sorted(values))
        return to_type_record(transaction_type)

    async def delete_type(self, db: AsyncSession, type_id: str) -> None:
        deleted = await self.store.delete_by_id(db, type_id)
        if not deleted:
            raise NotFoundError(resource=TRANSACTION_TYPE_RESOURCE, resource_id=type_id)
        logger.info("Transaction type %s deleted", type_id)


transaction_type_service = TransactionTypeService()
