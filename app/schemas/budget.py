# app/schemas/budget.py
from typing import List, Optional
from datetime import date
from decimal import Decimal
import uuid

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.category import CategoryRead
from app.schemas.fields import Amount, PositiveAmount, Percentage


class BudgetBase(BaseModel):
    income: Amount
    savings_percentage: Percentage
    groceries_allocation: Amount
    contingency_percentage: Percentage


class BudgetSetupRequest(BudgetBase):
    """Body of POST /budgets/setup and /budgets/setup/preview."""
    income: PositiveAmount
    savings_percentage: Percentage = Decimal(10)
    groceries_allocation: Amount = Decimal(500)
    contingency_percentage: Percentage = Decimal(10)
    month: Optional[date] = Field(None, description="Any day of the target month; defaults to the current month")
    allow_deficit: bool = Field(False, description="Create the budget even if allocations exceed income")


class BudgetUpdate(BaseModel):
    income: Optional[Amount] = None
    savings_percentage: Optional[Percentage] = None
    groceries_allocation: Optional[Amount] = None
    contingency_percentage: Optional[Percentage] = None


class BudgetRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[uuid.UUID] = None
    user_id: Optional[uuid.UUID] = None
    month: date
    income: Decimal
    savings_percentage: Decimal
    groceries_allocation: Decimal
    contingency_percentage: Decimal


class SeedCategoryRead(BaseModel):
    name: str
    allocated_amount: str
    color: str
    is_system: bool


class BudgetPlanResponse(BaseModel):
    income: str
    savings_amount: str
    contingency_amount: str
    groceries_allocation: str
    remaining: str
    has_deficit: bool
    seed_categories: List[SeedCategoryRead]


class BudgetSetupResponse(BaseModel):
    budget: BudgetRead
    plan: BudgetPlanResponse
    categories: List[CategoryRead]
