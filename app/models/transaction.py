# app/models/transaction.py
import uuid
from datetime import datetime
from sqlalchemy import Column, String, ForeignKey, Numeric, Date, DateTime, Uuid
from sqlalchemy.orm import relationship
from app.core.database import Base

class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # NULL means uncategorized
    category_id = Column(Uuid, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)
    amount = Column(Numeric(12, 2), nullable=False)
    description = Column(String(length=255), nullable=True)
    transaction_date = Column(Date, nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="transactions")
    category = relationship("Category", back_populates="transactions")

    def __repr__(self):
        return f"<Transaction amount={self.amount} date={self.transaction_date} user_id={self.user_id}>"
