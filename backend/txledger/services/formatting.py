"""
Transaction Ledger Backend — Response Formatter
================================================

What:  Turns stored records into response payloads.
Why:   The display name of a transaction type appears in three responses
       (type listing, transaction listing, transaction detail). It is built
       here and nowhere else.

Display name:
    name="BCA", type1="Debit", type2="Credit"  →  "BCA (Debit & Credit)"
    name="BCA", type1="Debit"                  →  "BCA (Debit)"
    name="BCA", type2="Credit"                 →  "BCA (Credit)"
    name="BCA"                                 →  "BCA"
Empty strings count as absent.
"""

from typing import Optional

from txledger.models.transaction import Transaction
from txledger.models.transaction_type import TransactionType
from txledger.schemas.transaction import TransactionDetail, TransactionRecord
from txledger.schemas.transaction_type import TransactionTypeOption, TransactionTypeRecord


def compose_display_name(
    name: str, type1: Optional[str] = None, type2: Optional[str] = None
) -> str:
    if type1 and type2:
        return f"{name} ({type1} & {type2})"
    if type1:
        return f"{name} ({type1})"
    if type2:
        return f"{name} ({type2})"
    return name


def format_type_option(transaction_type: TransactionType) -> TransactionTypeOption:
    return TransactionTypeOption(
        id=transaction_type.id,
        name=compose_display_name(
            transaction_type.name, transaction_type.type1, transaction_type.type2
        ),
        bank=transaction_type.name,
    )


def to_type_record(transaction_type: TransactionType) -> TransactionTypeRecord:
    return TransactionTypeRecord.model_validate(transaction_type)


def _transaction_fields(transaction: Transaction) -> dict:
    return {
        "id": transaction.id,
        "mid": transaction.mid,
        "tid": transaction.tid,
        "batch": transaction.batch,
        "amount": transaction.amount,
        "net_amount": transaction.net_amount,
        "mdr": transaction.mdr,
        "status": transaction.status,
        "date": transaction.date,
        "difference": transaction.difference,
        "created_at": transaction.created_at,
        "updated_at": transaction.updated_at,
    }


def to_transaction_record(transaction: Transaction) -> TransactionRecord:
    """Stored record with the type reference left as its id."""
    return TransactionRecord(
        transaction_type=transaction.transaction_type_id,
        **_transaction_fields(transaction),
    )


def format_transaction(
    transaction: Transaction, transaction_type: Optional[TransactionType]
) -> TransactionDetail:
    """Record with the type reference resolved; null if the type no longer exists."""
    return TransactionDetail(
        transaction_type=(
            format_type_option(transaction_type) if transaction_type is not None else None
        ),
        **_transaction_fields(transaction),
    )
