"""
Transaction Ledger Backend — Transaction Route Handlers
========================================================

    POST   /transactions/      create          201 record
    GET    /transactions/list  list            200 detail list, newest first
    GET    /transactions/{id}  get             200 detail
    PUT    /transactions/{id}  partial update  200 record
    DELETE /transactions/{id}  delete          200, data null

`/list` is declared before `/{transaction_id}` so it is not captured as an id.
Ids are plain strings; one that is not a UUID simply matches nothing (404).
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from txledger.auth import require_authenticated
from txledger.database import get_db_session
from txledger.schemas.common import Envelope, ErrorEnvelope
from txledger.schemas.transaction import TransactionDetail, TransactionRecord
from txledger.services.transaction_service import transaction_service

router = APIRouter(
    prefix="/transactions",
    tags=["Transactions"],
    dependencies=[Depends(require_authenticated)],
    responses={
        401: {"description": "Missing or invalid session cookie", "model": ErrorEnvelope},
        500: {"description": "Store failure", "model": ErrorEnvelope},
    },
)


@router.post(
    "/",
    status_code=201,
    response_model=Envelope[TransactionRecord],
    responses={
        400: {"description": "Validation failed", "model": ErrorEnvelope},
        404: {"description": "Transaction type not found", "model": ErrorEnvelope},
    },
    summary="Create a transaction",
)
async def create_transaction(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> Envelope[TransactionRecord]:
    record = await transaction_service.create_transaction(db, payload)
    return Envelope(code=201, message="Transaction created successfully", data=record)


@router.get(
    "/list",
    response_model=Envelope[List[TransactionDetail]],
    summary="List transactions, newest first, with their type resolved",
)
async def list_transactions(
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> Envelope[List[TransactionDetail]]:
    items = await transaction_service.list_transactions(db)
    return Envelope(code=200, message="Transactions retrieved successfully", data=items)


@router.get(
    "/{transaction_id}",
    response_model=Envelope[TransactionDetail],
    responses={404: {"description": "Transaction not found", "model": ErrorEnvelope}},
    summary="Get a transaction with its type resolved",
)
async def get_transaction(
    transaction_id: str,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> Envelope[TransactionDetail]:
    detail = await transaction_service.get_transaction(db, transaction_id)
    return Envelope(code=200, message="Transaction retrieved successfully", data=detail)


@router.put(
    "/{transaction_id}",
    response_model=Envelope[TransactionRecord],
    responses={
        400: {"description": "Validation failed", "model": ErrorEnvelope},
        404: {"description": "Transaction or transaction type not found", "model": ErrorEnvelope},
    },
    summary="Update the supplied fields of a transaction",
)
async def update_transaction(
    transaction_id: str,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> Envelope[TransactionRecord]:
    record = await transaction_service.update_transaction(db, transaction_id, payload)
    return Envelope(code=200, message="Transaction updated successfully", data=record)


@router.delete(
    "/{transaction_id}",
    response_model=Envelope[Any],
    responses={404: {"description": "Transaction not found", "model": ErrorEnvelope}},
    summary="Delete a transaction",
)
async def delete_transaction(
    transaction_id: str,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> Envelope[Any]:
    await transaction_service.delete_transaction(db, transaction_id)
    return Envelope(code=200, message="Transaction deleted successfully", data=None)
