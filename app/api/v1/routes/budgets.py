# app/api/v1/routes/budgets.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from datetime import date

from app.schemas.category import CategoryRead
from app.schemas.budget import (
    BudgetPlanResponse,
    BudgetRead,
    BudgetSetupRequest,
    BudgetSetupResponse,
    BudgetUpdate,
    SeedCategoryRead,
)
from app.crud.budget import create_budget_for_user, get_budget_for_month, update_budget
from app.crud.category import create_seed_categories_for_user
from app.core.database import get_async_session
from app.models.user import User
from app.api.deps import get_current_user, get_month
from app.utils.budget_setup import BudgetPlan, BudgetSetupPlanner
from app.utils.periods import month_start

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/budgets", tags=["budgets"])


def _plan_view(plan: BudgetPlan) -> BudgetPlanResponse:
    return BudgetPlanResponse(
        income=plan.income.to_display(),
        savings_amount=plan.savings_amount.to_display(),
        contingency_amount=plan.contingency_amount.to_display(),
        groceries_allocation=plan.groceries_allocation.to_display(),
        remaining=plan.remaining.to_display(),
        has_deficit=plan.has_deficit,
        seed_categories=[
            SeedCategoryRead(
                name=seed.name,
                allocated_amount=seed.allocated_amount.to_display(),
                color=seed.color,
                is_system=seed.is_system,
            )
            for seed in plan.seed_categories
        ],
    )


def _derive_plan(setup_in: BudgetSetupRequest) -> BudgetPlan:
    planner = BudgetSetupPlanner(
        income=setup_in.income,
        savings_percentage=setup_in.savings_percentage,
        groceries_allocation=setup_in.groceries_allocation,
        contingency_percentage=setup_in.contingency_percentage,
    )
    return planner.derive()


@router.post("/setup/preview", response_model=BudgetPlanResponse)
async def preview_budget_setup(
    setup_in: BudgetSetupRequest,
    user: User = Depends(get_current_user),
):
    """
    Show what a budget setup would allocate without saving anything.

    - **remaining**: income left after savings, groceries and contingency;
      negative when the allocations exceed income (**has_deficit**)
    """
    return _plan_view(_derive_plan(setup_in))


@router.post("/setup", response_model=BudgetSetupResponse, status_code=status.HTTP_201_CREATED)
async def setup_budget(
    setup_in: BudgetSetupRequest,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """
    Create the month's budget and seed the system categories
    (Savings, Groceries, Bills, Transport, Entertainment, Contingency).

    Refused with 422 when allocations exceed income unless **allow_deficit**
    is set, and with 409 when the month already has a budget.
    """
    plan = _derive_plan(setup_in)
    if plan.has_deficit and not setup_in.allow_deficit:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Allocations exceed income by {(-plan.remaining).to_display()}",
        )

    month = month_start(setup_in.month)
    # One commit for the budget and its categories
    budget = await create_budget_for_user(user.id, month, plan, db, commit=False)
    categories = await create_seed_categories_for_user(user.id, plan.seed_categories, db)
    await db.refresh(budget)
    logger.info(f"Budget for {month:%Y-%m} created for user {user.id} ({len(categories)} categories seeded)")

    return BudgetSetupResponse(
        budget=BudgetRead.model_validate(budget),
        plan=_plan_view(plan),
        categories=[CategoryRead.model_validate(c) for c in categories],
    )


@router.get("/current", response_model=BudgetRead)
async def read_current_budget(
    month: date = Depends(get_month),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    budget = await get_budget_for_month(user.id, month, db)
    if not budget:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="No budget set up for this month")
    return budget


@router.patch("/current", response_model=BudgetRead)
async def update_current_budget(
    budget_in: BudgetUpdate,
    month: date = Depends(get_month),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    budget = await get_budget_for_month(user.id, month, db)
    if not budget:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="No budget set up for this month")
    return await update_budget(budget, budget_in, db)
