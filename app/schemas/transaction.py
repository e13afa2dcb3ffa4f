# app/schemas/transaction.py
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from datetime import date
from decimal import Decimal
import uuid

from app.schemas.fields import Amount


class TransactionBase(BaseModel):
    amount: Amount
    category_id: Optional[uuid.UUID] = None
    description: Optional[str] = Field(None, max_length=255, description="E.g. Coffee at the corner shop")
    transaction_date: date = Field(default_factory=date.today)


class TransactionCreate(TransactionBase):
    pass


class TransactionUpdate(BaseModel):
    amount: Optional[Amount] = None
    category_id: Optional[uuid.UUID] = None
    description: Optional[str] = Field(None, max_length=255)
    transaction_date: Optional[date] = None


class TransactionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: Optional[uuid.UUID] = None
    category_id: Optional[uuid.UUID] = None
    amount: Decimal
    description: Optional[str] = None
    transaction_date: date
