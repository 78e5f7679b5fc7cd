"""
Transaction Ledger Backend — Referential Integrity Check
=========================================================

What:  Confirms that the TransactionType a transaction points at exists.
When:  After the body passed validation and before the transaction is
       written. On update it only runs when the body names a type.

The check and the following write are two separate statements. A type
deleted in between is not detected; transactions pointing at a missing type
resolve to a null type in responses.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from txledger.exceptions import NotFoundError
from txledger.models.transaction_type import TransactionType
from txledger.services.store import EntityStore, RawId

logger = logging.getLogger(__name__)

TRANSACTION_TYPE_RESOURCE = "Transaction type"


async def ensure_transaction_type_exists(
    db: AsyncSession,
    type_id: RawId,
    store: EntityStore[TransactionType],
) -> TransactionType:
    """Return the referenced type or raise NotFoundError("Transaction type")."""
    transaction_type = await store.find_by_id(db, type_id)
    if transaction_type is None:
        logger.info("Referenced transaction type %s does not exist", type_id)
        raise NotFoundError(resource=TRANSACTION_TYPE_RESOURCE, resource_id=str(type_id))
    return transaction_type
