# app/models/category.py
import uuid
from datetime import datetime
from sqlalchemy import Column, String, ForeignKey, Numeric, Boolean, DateTime, Uuid
from sqlalchemy.orm import relationship
from app.core.database import Base

class Category(Base):
    __tablename__ = "categories"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(length=100), nullable=False)
    # Planning target; never enforced when transactions are written
    allocated_amount = Column(Numeric(12, 2), nullable=False, default=0)
    color = Column(String(length=20), nullable=False, default="#6b7280")
    is_system = Column(Boolean(), nullable=False, default=False)  # True for categories seeded at budget setup

    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="categories")
    # Deleting a category leaves its transactions uncategorized
    transactions = relationship("Transaction", back_populates="category")

    def __repr__(self):
        return f"<Category name={self.name} user_id={self.user_id}>"
