"""
Transaction Ledger Backend — TransactionType SQLAlchemy Model
==============================================================

What:  ORM model for the `transaction_types` table: a named payment/bank
       category with up to two sub-type qualifiers (e.g. BCA / Debit / Credit).
Who:   Read and written through EntityStore by TransactionTypeService, and
       looked up by the referential check before every transaction write.

Table Design Rationale:
    - UUID primary key, generated in Python so it is known after flush
    - name is required; type1/type2 are optional qualifiers that feed the
      composed display name ("BCA (Debit & Credit)")
    - Transactions reference a type by id only; nothing here owns them and
      deleting a type never cascades
"""

import uuid
from typing import Optional

from sqlalchemy import Index, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from txledger.database import Base, TimestampMixin


class TransactionType(TimestampMixin, Base):
    """A payment/bank category referenced by zero or more transactions."""

    __tablename__ = "transaction_types"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(Text, nullable=False)

    type1: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    type2: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Listing is always newest first
    __table_args__ = (
        Index("idx_transaction_types_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<TransactionType(id={self.id}, name='{self.name}')>"
