"""
Transaction Ledger Backend — Transaction Service
=================================================

What:  Business logic for transactions.
Who:   Called by the /transactions route handlers.

Pipeline of every write (each step short-circuits on failure):
    ┌──────────┐    ┌──────────────┐    ┌───────────────┐    ┌──────────┐
    │ Validate │───▶│ Type exists? │───▶│ Store write   │───▶│ Format   │
    │  (400)   │    │    (404)     │    │    (500)      │    │          │
    └──────────┘    └──────────────┘    └───────────────┘    └──────────┘

Reads resolve ("populate") the referenced type so responses carry
{id, name: <display name>, bank: <type name>} instead of a bare id. The
listing resolves all referenced types with one extra query.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from txledger.exceptions import NotFoundError
from txledger.models.transaction import Transaction
from txledger.models.transaction_type import TransactionType
from txledger.schemas.transaction import (
    TransactionCreate,
    TransactionDetail,
    TransactionRecord,
    TransactionUpdate,
)
from txledger.services.formatting import format_transaction, to_transaction_record
from txledger.services.integrity import ensure_transaction_type_exists
from txledger.services.store import EntityStore
from txledger.services.validation import CREATE, UPDATE, PayloadValidator

logger = logging.getLogger(__name__)

TRANSACTION_RESOURCE = "Transaction"


class TransactionService:
    def __init__(
        self,
        store: Optional[EntityStore[Transaction]] = None,
        type_store: Optional[EntityStore[TransactionType]] = None,
        validator: Optional[PayloadValidator] = None,
    ):
        self.store = store or EntityStore(Transaction)
        self.type_store = type_store or EntityStore(TransactionType)
        self.validator = validator or PayloadValidator(
            create=TransactionCreate, update=TransactionUpdate
        )

    @staticmethod
    def _bind_type(values: Dict[str, Any], transaction_type: TransactionType) -> Dict[str, Any]:
        # The body names the type by string id; the column stores the UUID
        values = dict(values)
        values.pop("transaction_type", None)
        values["transaction_type_id"] = transaction_type.id
        return values

    async def create_transaction(self, db: AsyncSession, payload: Any) -> TransactionRecord:
        """
        Validate, check the referenced type, insert.

        Raises:
            ValidationError: body failed the create schema (nothing looked up)
            NotFoundError:   transaction_type does not resolve (nothing written)
            StoreError:      the insert failed
        """
        values = self.validator.validate(CREATE, payload)
        transaction_type = await ensure_transaction_type_exists(
            db, values["transaction_type"], self.type_store
        )
        transaction = await self.store.create(db, self._bind_type(values, transaction_type))
        logger.info(
            "Transaction created: %s (mid=%s, type=%s)",
            transaction.id, transaction.mid, transaction_type.id,
        )
        return to_transaction_record(transaction)

    async def list_transactions(self, db: AsyncSession) -> List[TransactionDetail]:
        transactions = await self.store.find_all_sorted(db)
        types = await self.type_store.find_by_ids(
            db, (t.transaction_type_id for t in transactions)
        )
        return [
            format_transaction(t, types.get(t.transaction_type_id)) for t in transactions
        ]

    async def get_transaction(self, db: AsyncSession, transaction_id: str) -> TransactionDetail:
        transaction = await self.store.find_by_id(db, transaction_id)
        if transaction is None:
            raise NotFoundError(resource=TRANSACTION_RESOURCE, resource_id=transaction_id)
        transaction_type = await self.type_store.find_by_id(db, transaction.transaction_type_id)
        return format_transaction(transaction, transaction_type)

    async def update_transaction(
        self, db: AsyncSession, transaction_id: str, payload: Any
    ) -> TransactionRecord:
        """
        Partial update. Only supplied fields change; the type reference is
        checked only when the body names one.
        """
        values = self.validator.validate(UPDATE, payload)

        existing = await self.store.find_by_id(db, transaction_id)
        if existing is None:
            raise NotFoundError(resource=TRANSACTION_RESOURCE, resource_id=transaction_id)

        if "transaction_type" in values:
            transaction_type = await ensure_transaction_type_exists(
                db, values["transaction_type"], self.type_store
            )
            values = self._bind_type(values, transaction_type)

        transaction = await self.store.update_by_id(db, existing.id, values)
        if transaction is None:
            raise NotFoundError(resource=TRANSACTION_RESOURCE, resource_id=transaction_id)
        logger.info("Transaction %s updated: %s", transaction_id, sorted(values))
        return to_transaction_record(transaction)

    async def delete_transaction(self, db: AsyncSession, transaction_id: str) -> None:
        deleted = await self.store.delete_by_id(db, transaction_id)
        if not deleted:
            raise NotFoundError(resource=TRANSACTION_RESOURCE, resource_id=transaction_id)
        logger.info("Transaction %s deleted", transaction_id)


transaction_service = TransactionService()
