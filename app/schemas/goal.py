# app/schemas/goal.py
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from datetime import date
from decimal import Decimal
import uuid

from app.schemas.fields import Amount, PositiveAmount


class GoalBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="E.g. Family trip")
    target_amount: PositiveAmount
    monthly_allocation: Amount = Decimal(0)
    deadline: Optional[date] = None


class GoalCreate(GoalBase):
    pass


class GoalUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    target_amount: Optional[PositiveAmount] = None
    monthly_allocation: Optional[Amount] = None
    deadline: Optional[date] = None


class GoalContribution(BaseModel):
    amount: PositiveAmount


class GoalRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: Optional[uuid.UUID] = None
    name: str
    target_amount: Decimal
    current_amount: Decimal = Decimal(0)
    monthly_allocation: Decimal = Decimal(0)
    deadline: Optional[date] = None
    is_active: bool = True


class GoalProgressResponse(BaseModel):
    id: uuid.UUID
    name: str
    target_amount: str
    current_amount: str
    monthly_allocation: str
    deadline: Optional[date]
    percent_complete: float
    remaining_amount: str
    months_remaining: Optional[int]
    projected_completion: Optional[date]
    on_track: Optional[bool]
    is_complete: bool
