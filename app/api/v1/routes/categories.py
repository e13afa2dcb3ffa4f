# app/api/v1/routes/categories.py
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from app.schemas.category import CategoryCreate, CategoryRead, CategorySpendRead, CategoryUpdate
from app.schemas.transaction import TransactionRead
from app.crud.category import (
    create_category_for_user,
    get_categories_for_user,
    get_category_by_id,
    update_category,
    delete_category,
)
from app.crud.transaction import get_transactions_for_month
from app.core.database import get_async_session
from app.models.user import User
from app.api.deps import get_current_user, get_month
from app.utils.spending import CategorySpend, CategorySpendCalculator

router = APIRouter(prefix="/categories", tags=["categories"])


def category_spend_view(row: CategorySpend) -> CategorySpendRead:
    return CategorySpendRead(
        id=row.category_id,
        name=row.name,
        color=row.color or "",
        allocated=row.allocated.to_display(),
        spent=row.spent.to_display(),
        remaining=row.remaining.to_display(),
        percent_used=float(round(row.percent_used, 1)) if row.percent_used is not None else None,
        is_over_budget=row.is_over_budget,
        overage=row.overage.to_display(),
    )


@router.get("", response_model=List[CategoryRead])
async def read_categories(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await get_categories_for_user(user.id, db)

@router.post("", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
async def create_category(
    cat_in: CategoryCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await create_category_for_user(user.id, cat_in, db)

@router.get("/spending", response_model=List[CategorySpendRead])
async def read_category_spending(
    month: date = Depends(get_month),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """Spent vs. allocated for every category in the month."""
    categories = [CategoryRead.model_validate(c) for c in await get_categories_for_user(user.id, db)]
    transactions = [TransactionRead.model_validate(t) for t in await get_transactions_for_month(user.id, month, db)]
    calculator = CategorySpendCalculator(categories, transactions)
    return [category_spend_view(row) for row in calculator.breakdown()]

@router.get("/{category_id}", response_model=CategoryRead)
async def read_category(
    category_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    category = await get_category_by_id(category_id, user.id, db)
    if not category:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Category not found")
    return category

@router.patch("/{category_id}", response_model=CategoryRead)
async def update_category_endpoint(
    category_id: uuid.UUID,
    cat_in: CategoryUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    category = await get_category_by_id(category_id, user.id, db)
    if not category:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Category not found")
    return await update_category(category, cat_in, db)

@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category_endpoint(
    category_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    category = await get_category_by_id(category_id, user.id, db)
    if not category:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Category not found")
    await delete_category(category, db)
    return None
