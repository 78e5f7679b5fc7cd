"""
Transaction Ledger Backend — Transaction SQLAlchemy Model
==========================================================

What:  ORM model for the `transactions` table: one payment record (merchant,
       terminal, batch, gross/net amounts, MDR fee, status, settlement date).
Who:   Read and written through EntityStore by TransactionService.

Reference to TransactionType:
    `transaction_type_id` (column `transaction_type`) is a plain UUID column,
    deliberately without a FOREIGN KEY constraint. Existence is checked by
    the application at write time only; deleting a type leaves its
    transactions untouched and they resolve to a null type afterwards.
"""

import uuid
import datetime
from typing import Optional

from sqlalchemy import Date, Float, Index, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from txledger.database import Base, TimestampMixin


class Transaction(TimestampMixin, Base):
    """A single payment record referencing one TransactionType by id."""

    __tablename__ = "transactions"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # Text columns are unbounded; request rules set no maximum length

    # Merchant ID
    mid: Mapped[str] = mapped_column(Text, nullable=False)

    # Terminal ID
    tid: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    transaction_type_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        "transaction_type",
        Uuid,
        nullable=True,
    )

    batch: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    amount: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    net_amount: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    # Merchant discount rate charged on the amount
    mdr: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    status: Mapped[str] = mapped_column(Text, nullable=False)

    date: Mapped[Optional[datetime.date]] = mapped_column(Date, nullable=True)

    difference: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    __table_args__ = (
        Index("idx_transactions_created_at", "created_at"),
        Index("idx_transactions_transaction_type", "transaction_type"),
    )

    def __repr__(self) -> str:
        return (
            f"<Transaction(id={self.id}, mid='{self.mid}', "
            f"status='{self.status}')>"
        )
