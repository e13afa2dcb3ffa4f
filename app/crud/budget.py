# app/crud/budget.py
import logging
from datetime import date
from typing import Optional
import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.core.exceptions import ConcurrencyConflict
from app.models.budget import Budget
from app.schemas.budget import BudgetUpdate
from app.utils.budget_setup import BudgetPlan
from app.utils.periods import month_start

logger = logging.getLogger(__name__)

async def get_budget_for_month(user_id: uuid.UUID, month: date, db: AsyncSession) -> Optional[Budget]:
    result = await db.execute(
        select(Budget).where(Budget.user_id == user_id, Budget.month == month_start(month))
    )
    return result.scalar_one_or_none()

async def create_budget_for_user(
    user_id: uuid.UUID,
    month: date,
    plan: BudgetPlan,
    db: AsyncSession,
    commit: bool = True,
) -> Budget:
    """
    Insert the month's budget. A second budget for the same month is a conflict.

    With ``commit=False`` the row is only flushed, so the caller can commit it
    together with the seeded categories.
    """
    new_budget = Budget(
        user_id=user_id,
        month=month_start(month),
        income=plan.income.amount,
        savings_percentage=plan.savings_percentage,
        groceries_allocation=plan.groceries_allocation.amount,
        contingency_percentage=plan.contingency_percentage,
    )
    db.add(new_budget)
    try:
        if commit:
            await db.commit()
        else:
            await db.flush()
    except IntegrityError as e:
        await db.rollback()
        logger.warning(f"Duplicate budget for user {user_id} month {month_start(month)}")
        raise ConcurrencyConflict(f"A budget for {month_start(month):%Y-%m} already exists") from e
    if commit:
        await db.refresh(new_budget)
    return new_budget

async def update_budget(budget: Budget, budget_in: BudgetUpdate, db: AsyncSession) -> Budget:
    for field, value in budget_in.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(budget, field, value)
    db.add(budget)
    await db.commit()
    await db.refresh(budget)
    return budget
