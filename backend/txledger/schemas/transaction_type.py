"""
Transaction Ledger Backend — TransactionType Schemas
=====================================================

Request schemas (validated by PayloadValidator):
    TransactionTypeCreate  name required (min 3 chars), type1/type2 optional
    TransactionTypeUpdate  every field optional, same rules when present;
                           name may be omitted but not set to null

Response schemas:
    TransactionTypeRecord  raw stored record (create, get, update)
    TransactionTypeOption  {id, name: <display name>, bank: <name>}, used by
                           the listing and embedded in transaction responses
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from txledger.schemas.fields import NameStr, OptionalStr

_REQUEST_CONFIG = ConfigDict(strict=True, extra="ignore")


class TransactionTypeCreate(BaseModel):
    model_config = _REQUEST_CONFIG

    name: NameStr
    type1: OptionalStr = None
    type2: OptionalStr = None


class TransactionTypeUpdate(BaseModel):
    model_config = _REQUEST_CONFIG

    name: NameStr = None
    type1: OptionalStr = None
    type2: OptionalStr = None


class TransactionTypeRecord(BaseModel):
    id: uuid.UUID
    name: str
    type1: Optional[str] = None
    type2: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TransactionTypeOption(BaseModel):
    id: uuid.UUID
    name: str = Field(description="Composed display name, e.g. 'BCA (Debit & Credit)'")
    bank: str = Field(description="Raw type name, e.g. 'BCA'")
