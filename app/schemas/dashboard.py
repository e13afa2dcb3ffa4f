# app/schemas/dashboard.py
from typing import List, Optional
from datetime import date
import uuid

from pydantic import BaseModel

from app.schemas.category import CategorySpendRead
from app.schemas.goal import GoalProgressResponse


class SummaryCards(BaseModel):
    month: date
    income: str
    spent: str
    # null when income is zero
    spent_percentage: Optional[float]
    remaining: str
    savings_target: str
    savings_percentage: float
    total_allocated: str
    uncategorized_spent: str


class GoalsTotalsRead(BaseModel):
    target: str
    current: str


class RecentTransaction(BaseModel):
    id: uuid.UUID
    description: str
    category_name: str
    category_color: Optional[str]
    amount: str
    transaction_date: date


class DashboardSummary(BaseModel):
    cards: SummaryCards
    category_breakdown: List[CategorySpendRead]
    goals_totals: GoalsTotalsRead
    goals: List[GoalProgressResponse]
    recent_transactions: List[RecentTransaction]
