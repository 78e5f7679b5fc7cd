"""
Transaction Ledger Backend — Transaction Schemas
=================================================

Request schemas (validated by PayloadValidator):
    TransactionCreate  mid, transaction_type, amount, net_amount, status
                       required; the rest optional
    TransactionUpdate  every field optional with the same rules; fields that
                       are required on create may be omitted but not nulled

`date` arrives as "MM/DD/YYYY" and leaves the validator as a date, which
serializes as "YYYY-MM-DD".

Response schemas:
    TransactionRecord  stored record; transaction_type is the referenced id
    TransactionDetail  same record with transaction_type resolved into a
                       TransactionTypeOption (null when the type is gone)
"""

import datetime
import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict

from txledger.schemas.fields import (
    CalendarDate,
    NonEmptyStr,
    NonNegativeNumber,
    Number,
    OptionalStr,
)
from txledger.schemas.transaction_type import TransactionTypeOption

_REQUEST_CONFIG = ConfigDict(strict=True, extra="ignore")


class TransactionCreate(BaseModel):
    model_config = _REQUEST_CONFIG

    mid: NonEmptyStr
    tid: OptionalStr = None
    transaction_type: NonEmptyStr
    batch: OptionalStr = None
    amount: NonNegativeNumber
    net_amount: NonNegativeNumber
    mdr: Optional[NonNegativeNumber] = None
    status: NonEmptyStr
    date: CalendarDate = None
    difference: Optional[Number] = None


class TransactionUpdate(BaseModel):
    model_config = _REQUEST_CONFIG

    mid: NonEmptyStr = None
    tid: OptionalStr = None
    transaction_type: NonEmptyStr = None
    batch: OptionalStr = None
    amount: NonNegativeNumber = None
    net_amount: NonNegativeNumber = None
    mdr: Optional[NonNegativeNumber] = None
    status: NonEmptyStr = None
    date: CalendarDate = None
    difference: Optional[Number] = None


class _TransactionBase(BaseModel):
    id: uuid.UUID
    mid: str
    tid: Optional[str] = None
    batch: Optional[str] = None
    amount: Optional[float] = None
    net_amount: Optional[float] = None
    mdr: Optional[float] = None
    status: str
    date: Optional[datetime.date] = None
    difference: Optional[float] = None
    created_at: datetime.datetime
    updated_at: datetime.datetime


class TransactionRecord(_TransactionBase):
    transaction_type: Optional[uuid.UUID] = None


class TransactionDetail(_TransactionBase):
    transaction_type: Optional[TransactionTypeOption] = None
