# app/utils/budgeting.py
"""
Whole-month budget figures.

``BudgetSummary`` aggregates one month's budget, the user's categories, the
month's transactions and the user's goals into the numbers shown on the
dashboard. Inputs are assumed to be already scoped to one user and month.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, List, Optional

from app.core.exceptions import NotApplicable
from app.utils.money import HUNDRED, Money
from app.utils.spending import CategorySpendCalculator


@dataclass(frozen=True)
class GoalsTotals:
    target: Money
    current: Money


class BudgetSummary:
    def __init__(
        self,
        budget: Any,
        categories: Iterable[Any],
        transactions: Iterable[Any],
        goals: Iterable[Any] = (),
    ):
        self.budget = budget
        self.categories = list(categories)
        self.transactions = list(transactions)
        self.goals = list(goals)
        self.income = Money.of(budget.income)

    # ────────────────────────────────────────────────────────────────────────
    # TOTALS
    # ────────────────────────────────────────────────────────────────────────
    def total_spent(self) -> Money:
        # Uncategorized transactions count here too
        return Money.sum(tx.amount for tx in self.transactions)

    def total_allocated(self) -> Money:
        return Money.sum(category.allocated_amount for category in self.categories)

    def remaining_budget(self) -> Money:
        """
        ``income - total_spent``; negative when the month is overspent.

        Independent of per-category overage: a category can be over budget
        while this figure is still positive, and vice versa.
        """
        return self.income - self.total_spent()

    def savings_target(self) -> Money:
        return self.income.multiply_by_percentage(self.budget.savings_percentage)

    # ────────────────────────────────────────────────────────────────────────
    # RATIOS
    # ────────────────────────────────────────────────────────────────────────
    def spent_ratio(self) -> Decimal:
        if self.income.is_zero():
            raise NotApplicable("Spent ratio is not applicable when income is zero")
        return self.total_spent().amount / self.income.amount

    def spent_percentage(self) -> Optional[Decimal]:
        """``spent_ratio * 100`` or ``None`` when there is no income."""
        try:
            return self.spent_ratio() * HUNDRED
        except NotApplicable:
            return None

    # ────────────────────────────────────────────────────────────────────────
    # GOALS
    # ────────────────────────────────────────────────────────────────────────
    def active_goals(self) -> List[Any]:
        return [goal for goal in self.goals if getattr(goal, "is_active", True)]

    def goals_totals(self) -> GoalsTotals:
        active = self.active_goals()
        return GoalsTotals(
            target=Money.sum(goal.target_amount for goal in active),
            current=Money.sum(goal.current_amount for goal in active),
        )

    # ────────────────────────────────────────────────────────────────────────
    # MISC
    # ────────────────────────────────────────────────────────────────────────
    def category_spending(self) -> CategorySpendCalculator:
        return CategorySpendCalculator(self.categories, self.transactions)

    def recent_transactions(self, limit: int = 5) -> List[Any]:
        """Newest first; ties keep their input order."""
        ordered = sorted(self.transactions, key=lambda tx: tx.transaction_date, reverse=True)
        return ordered[:limit]
