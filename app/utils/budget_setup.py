# app/utils/budget_setup.py
"""
First-time budget configuration.

Derives the savings and contingency amounts from the user's percentages and
produces the system categories seeded for a new budget.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import List

from app.core.exceptions import InvalidAmount
from app.utils.money import Money, Number, check_percentage


@dataclass(frozen=True)
class SeedCategory:
    name: str
    allocated_amount: Money
    color: str
    is_system: bool = True


@dataclass(frozen=True)
class BudgetPlan:
    income: Money
    savings_percentage: Decimal
    contingency_percentage: Decimal
    savings_amount: Money
    contingency_amount: Money
    groceries_allocation: Money
    remaining: Money
    seed_categories: List[SeedCategory]

    @property
    def has_deficit(self) -> bool:
        return self.remaining.is_negative()


# Display colors of the seeded categories
SAVINGS_COLOR = "#10b981"
GROCERIES_COLOR = "#f59e0b"
BILLS_COLOR = "#ef4444"
TRANSPORT_COLOR = "#3b82f6"
ENTERTAINMENT_COLOR = "#8b5cf6"
CONTINGENCY_COLOR = "#ec4899"


class BudgetSetupPlanner:
    def __init__(
        self,
        income: Number,
        savings_percentage: Number,
        groceries_allocation: Number,
        contingency_percentage: Number,
    ):
        self.income = Money.of(income)
        if not self.income.is_positive():
            raise InvalidAmount(f"Income must be greater than zero, got {self.income}")
        self.savings_percentage = check_percentage(savings_percentage)
        self.groceries_allocation = Money.of(groceries_allocation)
        if self.groceries_allocation.is_negative():
            raise InvalidAmount(f"Groceries allocation cannot be negative, got {self.groceries_allocation}")
        self.contingency_percentage = check_percentage(contingency_percentage)

    def derive(self) -> BudgetPlan:
        """
        Work out the plan. A negative ``remaining`` is reported, not refused;
        whether to block on it is up to the caller.
        """
        savings = self.income.multiply_by_percentage(self.savings_percentage)
        contingency = self.income.multiply_by_percentage(self.contingency_percentage)
        remaining = self.income - (savings + self.groceries_allocation + contingency)

        seed = [
            SeedCategory("Savings", savings, SAVINGS_COLOR),
            SeedCategory("Groceries", self.groceries_allocation, GROCERIES_COLOR),
            SeedCategory("Bills", Money.zero(), BILLS_COLOR),
            SeedCategory("Transport", Money.zero(), TRANSPORT_COLOR),
            SeedCategory("Entertainment", Money.zero(), ENTERTAINMENT_COLOR),
            SeedCategory("Contingency", contingency, CONTINGENCY_COLOR),
        ]
        return BudgetPlan(
            income=self.income,
            savings_percentage=self.savings_percentage,
            contingency_percentage=self.contingency_percentage,
            savings_amount=savings,
            contingency_amount=contingency,
            groceries_allocation=self.groceries_allocation,
            remaining=remaining,
            seed_categories=seed,
        )
