# app/api/v1/routes/transactions.py
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import uuid

from app.schemas.transaction import (
    TransactionCreate,
    TransactionRead,
    TransactionUpdate,
)
from app.crud.transaction import (
    create_transaction_for_user,
    get_transactions_for_month,
    get_transaction_by_id,
    update_transaction,
    delete_transaction,
)
from app.crud.category import get_category_by_id
from app.core.database import get_async_session
from app.models.user import User
from app.api.deps import get_current_user, get_month

router = APIRouter(prefix="/transactions", tags=["transactions"])


async def _check_category(category_id: Optional[uuid.UUID], user_id: uuid.UUID, db: AsyncSession) -> None:
    # A transaction may only reference one of the user's own categories
    if category_id is not None and not await get_category_by_id(category_id, user_id, db):
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Category not found")


@router.get("", response_model=List[TransactionRead])
async def read_transactions(
    month: date = Depends(get_month),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """The month's transactions, newest first."""
    return await get_transactions_for_month(user.id, month, db)

@router.post("", response_model=TransactionRead, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    tx_in: TransactionCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    await _check_category(tx_in.category_id, user.id, db)
    return await create_transaction_for_user(user.id, tx_in, db)

@router.get("/{transaction_id}", response_model=TransactionRead)
async def read_transaction(
    transaction_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    tx = await get_transaction_by_id(transaction_id, user.id, db)
    if not tx:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    return tx

@router.patch("/{transaction_id}", response_model=TransactionRead)
async def update_transaction_endpoint(
    transaction_id: uuid.UUID,
    tx_in: TransactionUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    tx = await get_transaction_by_id(transaction_id, user.id, db)
    if not tx:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    await _check_category(tx_in.category_id, user.id, db)
    return await update_transaction(tx, tx_in, db)

@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction_endpoint(
    transaction_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    tx = await get_transaction_by_id(transaction_id, user.id, db)
    if not tx:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    await delete_transaction(tx, db)
    return None
