# app/api/v1/routes/dashboard.py
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_async_session
from app.models.user import User
from app.crud.budget import get_budget_for_month
from app.crud.category import get_categories_for_user
from app.crud.goal import get_active_goals_for_user
from app.crud.transaction import get_transactions_for_month
from app.schemas.budget import BudgetRead
from app.schemas.category import CategoryRead
from app.schemas.dashboard import DashboardSummary, GoalsTotalsRead, RecentTransaction, SummaryCards
from app.schemas.goal import GoalRead
from app.schemas.transaction import TransactionRead
from app.api.deps import get_current_user, get_month
from app.api.v1.routes.categories import category_spend_view
from app.api.v1.routes.goals import goal_progress_view
from app.utils.budgeting import BudgetSummary
from app.utils.money import Money

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

RECENT_TRANSACTIONS_LIMIT = 5


@router.get("/summary", response_model=DashboardSummary)
async def get_dashboard_summary(
    month: date = Depends(get_month),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """
    Returns everything the overview screen needs for one month:
    - Cards: income, spent (and % of income), remaining, savings target
    - Category breakdown: spent vs. allocated, over-budget flags
    - Goals: totals and per-goal progress for active goals
    - Recent transactions
    """
    budget = await get_budget_for_month(user.id, month, db)
    if not budget:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="No budget set up for this month")

    categories = [CategoryRead.model_validate(c) for c in await get_categories_for_user(user.id, db)]
    transactions = [TransactionRead.model_validate(t) for t in await get_transactions_for_month(user.id, month, db)]
    goals = [GoalRead.model_validate(g) for g in await get_active_goals_for_user(user.id, db)]

    summary = BudgetSummary(BudgetRead.model_validate(budget), categories, transactions, goals)
    spending = summary.category_spending()
    spent_percentage = summary.spent_percentage()
    goals_totals = summary.goals_totals()

    cards = SummaryCards(
        month=month,
        income=summary.income.to_display(),
        spent=summary.total_spent().to_display(),
        spent_percentage=float(round(spent_percentage, 1)) if spent_percentage is not None else None,
        remaining=summary.remaining_budget().to_display(),
        savings_target=summary.savings_target().to_display(),
        savings_percentage=float(budget.savings_percentage),
        total_allocated=summary.total_allocated().to_display(),
        uncategorized_spent=spending.uncategorized_total().to_display(),
    )

    by_id = {c.id: c for c in categories}
    recent = []
    for tx in summary.recent_transactions(RECENT_TRANSACTIONS_LIMIT):
        category = by_id.get(tx.category_id)
        recent.append(
            RecentTransaction(
                id=tx.id,
                description=tx.description or "Untitled",
                category_name=category.name if category else "Uncategorized",
                category_color=category.color if category else None,
                amount=Money.of(tx.amount).to_display(),
                transaction_date=tx.transaction_date,
            )
        )

    today = date.today()
    return DashboardSummary(
        cards=cards,
        category_breakdown=[category_spend_view(row) for row in spending.breakdown()],
        goals_totals=GoalsTotalsRead(
            target=goals_totals.target.to_display(),
            current=goals_totals.current.to_display(),
        ),
        goals=[goal_progress_view(goal, today) for goal in summary.active_goals()],
        recent_transactions=recent,
    )
