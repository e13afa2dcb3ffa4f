# app/crud/transaction.py
from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import desc
from app.models.transaction import Transaction
from typing import List, Optional
import uuid
from app.schemas.transaction import TransactionCreate, TransactionUpdate
from app.utils.periods import month_bounds

NULLABLE_FIELDS = {"category_id", "description"}

async def get_transactions_for_user(
    user_id: uuid.UUID,
    db: AsyncSession,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> List[Transaction]:
    """Transactions between ``start`` and ``end`` (inclusive), newest first."""
    query = select(Transaction).where(Transaction.user_id == user_id)
    if start is not None:
        query = query.where(Transaction.transaction_date >= start)
    if end is not None:
        query = query.where(Transaction.transaction_date <= end)
    query = query.order_by(desc(Transaction.transaction_date), desc(Transaction.created_at))
    result = await db.execute(query)
    return result.scalars().all()

async def get_transactions_for_month(user_id: uuid.UUID, month: date, db: AsyncSession) -> List[Transaction]:
    start, end = month_bounds(month)
    return await get_transactions_for_user(user_id, db, start=start, end=end)

async def get_transaction_by_id(transaction_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Transaction]:
    result = await db.execute(
        select(Transaction).where(Transaction.id == transaction_id, Transaction.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def create_transaction_for_user(user_id: uuid.UUID, tx_in: TransactionCreate, db: AsyncSession) -> Transaction:
    new_tx = Transaction(**tx_in.model_dump(), user_id=user_id)
    db.add(new_tx)
    await db.commit()
    await db.refresh(new_tx)
    return new_tx

async def update_transaction(tx: Transaction, tx_in: TransactionUpdate, db: AsyncSession) -> Transaction:
    for field, value in tx_in.model_dump(exclude_unset=True).items():
        # An explicit null uncategorizes / clears the description
        if value is None and field not in NULLABLE_FIELDS:
            continue
        setattr(tx, field, value)
    db.add(tx)
    await db.commit()
    await db.refresh(tx)
    return tx

async def delete_transaction(tx: Transaction, db: AsyncSession) -> None:
    # Permanent; transactions have no soft delete
    await db.delete(tx)
    await db.commit()
