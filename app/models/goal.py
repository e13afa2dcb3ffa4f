# app/models/goal.py
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Numeric, Date, DateTime, ForeignKey, Boolean, Integer, CheckConstraint, Uuid
from sqlalchemy.orm import relationship
from app.core.database import Base

class Goal(Base):
    __tablename__ = "goals"
    __table_args__ = (
        CheckConstraint("target_amount > 0", name="ck_goals_target_positive"),
        CheckConstraint("current_amount >= 0", name="ck_goals_current_non_negative"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(length=100), nullable=False)
    target_amount = Column(Numeric(12, 2), nullable=False)
    # Only ever incremented, see crud.goal.add_contribution
    current_amount = Column(Numeric(12, 2), nullable=False, default=0)
    monthly_allocation = Column(Numeric(12, 2), nullable=False, default=0)
    deadline = Column(Date, nullable=True)
    # Deleting a goal clears this flag; rows are never removed
    is_active = Column(Boolean, nullable=False, default=True)
    version = Column(Integer, nullable=False, default=1)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="goals")

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self):
        return f"<Goal name={self.name} target={self.target_amount} user_id={self.user_id}>"
