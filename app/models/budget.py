# app/models/budget.py
import uuid
from datetime import datetime
from sqlalchemy import Column, Date, DateTime, ForeignKey, Numeric, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from app.core.database import Base

class Budget(Base):
    __tablename__ = "monthly_budgets"
    # One budget per user per calendar month
    __table_args__ = (UniqueConstraint("user_id", "month", name="uq_monthly_budgets_user_month"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # Always the first day of the month
    month = Column(Date, nullable=False)
    income = Column(Numeric(12, 2), nullable=False)
    savings_percentage = Column(Numeric(5, 2), nullable=False, default=0)
    groceries_allocation = Column(Numeric(12, 2), nullable=False, default=0)
    contingency_percentage = Column(Numeric(5, 2), nullable=False, default=0)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="budgets")

    def __repr__(self):
        return f"<Budget month={self.month} income={self.income} user_id={self.user_id}>"
