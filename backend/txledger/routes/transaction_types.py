"""
Transaction Ledger Backend — TransactionType Route Handlers
============================================================

    POST   /transactions-type       create          201 record
    GET    /transactions-type/list  list            200 [{id, name, bank}]
    GET    /transactions-type/{id}  get             200 record
    PUT    /transactions-type/{id}  partial update  200 record
    DELETE /transactions-type/{id}  delete          200, data null
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from txledger.auth import require_authenticated_for_types
from txledger.database import get_db_session
from txledger.schemas.common import Envelope, ErrorEnvelope
from txledger.schemas.transaction_type import TransactionTypeOption, TransactionTypeRecord
from txledger.services.transaction_type_service import transaction_type_service

router = APIRouter(
    prefix="/transactions-type",
    tags=["Transaction Types"],
    dependencies=[Depends(require_authenticated_for_types)],
    responses={
        401: {"description": "Missing or invalid session cookie", "model": ErrorEnvelope},
        500: {"description": "Store failure", "model": ErrorEnvelope},
    },
)


@router.post(
    "",
    status_code=201,
    response_model=Envelope[TransactionTypeRecord],
    responses={400: {"description": "Validation failed", "model": ErrorEnvelope}},
    summary="Create a transaction type",
)
async def create_transaction_type(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> Envelope[TransactionTypeRecord]:
    record = await transaction_type_service.create_type(db, payload)
    return Envelope(code=201, message="Transaction type created successfully", data=record)


@router.get(
    "/list",
    response_model=Envelope[List[TransactionTypeOption]],
    summary="List transaction types with their display names",
)
async def list_transaction_types(
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> Envelope[List[TransactionTypeOption]]:
    items = await transaction_type_service.list_types(db)
    return Envelope(code=200, message="Transaction types retrieved successfully", data=items)


@router.get(
    "/{type_id}",
    response_model=Envelope[TransactionTypeRecord],
    responses={404: {"description": "Transaction type not found", "model": ErrorEnvelope}},
    summary="Get a transaction type",
)
async def get_transaction_type(
    type_id: str,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> Envelope[TransactionTypeRecord]:
    record = await transaction_type_service.get_type(db, type_id)
    return Envelope(code=200, message="Transaction type retrieved successfully", data=record)


@router.put(
    "/{type_id}",
    response_model=Envelope[TransactionTypeRecord],
    responses={
        400: {"description": "Validation failed", "model": ErrorEnvelope},
        404: {"description": "Transaction type not found", "model": ErrorEnvelope},
    },
    summary="Update the supplied fields of a transaction type",
)
async def update_transaction_type(
    type_id: str,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> Envelope[TransactionTypeRecord]:
    record = await transaction_type_service.update_type(db, type_id, payload)
    return Envelope(code=200, message="Transaction type updated successfully", data=record)


@router.delete(
    "/{type_id}",
    response_model=Envelope[Any],
    responses={404: {"description": "Transaction type not found", "model": ErrorEnvelope}},
    summary="Delete a transaction type (transactions referencing it are kept)",
)
async def delete_transaction_type(
    type_id: str,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> Envelope[Any]:
    await transaction_type_service.delete_type(db, type_id)
    return Envelope(code=200, message="Transaction type deleted successfully", data=None)
