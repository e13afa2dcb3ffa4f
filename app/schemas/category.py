# app/schemas/category.py
from typing import Optional
from decimal import Decimal
import uuid

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.fields import Amount


class CategoryBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    allocated_amount: Amount = Decimal(0)
    color: str = Field("#6b7280", max_length=20)


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    allocated_amount: Optional[Amount] = None
    color: Optional[str] = Field(None, max_length=20)


class CategoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: Optional[uuid.UUID] = None
    name: str
    allocated_amount: Decimal
    color: str
    is_system: bool = False


class CategorySpendRead(BaseModel):
    id: uuid.UUID
    name: str
    color: str
    allocated: str
    spent: str
    remaining: str
    percent_used: Optional[float]
    is_over_budget: bool
    overage: str
