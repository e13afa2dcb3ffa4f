# app/utils/goals.py
"""
Savings-goal progress: percent complete, remaining amount and ETA.
"""
import calendar
import copy
from datetime import date
from decimal import Decimal, ROUND_CEILING
from typing import Any, Optional

from app.core.exceptions import InvalidAmount
from app.utils.money import HUNDRED, Money


def add_months(day: date, months: int) -> date:
    """First day of the month ``months`` after ``day``'s month."""
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def end_of_month(day: date) -> date:
    return date(day.year, day.month, calendar.monthrange(day.year, day.month)[1])


class GoalProgressCalculator:
    def __init__(self, goal: Any):
        self.goal = goal
        self.target = Money.of(goal.target_amount)
        self.current = Money.of(goal.current_amount)
        self.monthly_allocation = Money.of(goal.monthly_allocation)

    def percent_complete(self) -> Decimal:
        # target_amount > 0 is an entity invariant; over-saved goals go past 100
        return self.current.amount / self.target.amount * HUNDRED

    def remaining(self) -> Money:
        return self.target - self.current

    def is_complete(self) -> bool:
        return self.current >= self.target

    def months_remaining(self) -> Optional[int]:
        if self.monthly_allocation.amount <= 0:
            return None
        outstanding = self.remaining().floor_zero()
        months = (outstanding.amount / self.monthly_allocation.amount).to_integral_value(rounding=ROUND_CEILING)
        return int(months)

    def projected_completion(self, today: date) -> Optional[date]:
        """Month in which the goal is reached at the planned monthly allocation."""
        months = self.months_remaining()
        if months is None:
            return None
        return add_months(today, months)

    def on_track(self, today: date) -> Optional[bool]:
        deadline = getattr(self.goal, "deadline", None)
        projected = self.projected_completion(today)
        if deadline is None or projected is None:
            return None
        # A goal reached within the deadline's month counts as on time
        return projected <= end_of_month(deadline)

    def contribute(self, amount: Money) -> Any:
        """
        Return the goal state after adding ``amount``.

        The input goal is left untouched. Persisting the new state must go
        through an atomic increment (see app.crud.goal.add_contribution).
        """
        amount = Money.of(amount)
        if not amount.is_positive():
            raise InvalidAmount(f"Contribution must be greater than zero, got {amount}")
        new_current = (self.current + amount).amount
        if hasattr(self.goal, "model_copy"):
            return self.goal.model_copy(update={"current_amount": new_current})
        clone = copy.copy(self.goal)
        clone.current_amount = new_current
        return clone
