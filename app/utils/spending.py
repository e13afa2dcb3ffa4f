# app/utils/spending.py
"""
Per-category spend against allocation.

Transactions are expected to be pre-filtered to one user and one month.
"""
from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Hashable, Iterable, List, Optional

from app.core.exceptions import NotFound
from app.utils.money import HUNDRED, Money


@dataclass(frozen=True)
class CategorySpend:
    category_id: Hashable
    name: str
    color: Optional[str]
    allocated: Money
    spent: Money
    remaining: Money
    percent_used: Optional[Decimal]
    is_over_budget: bool
    overage: Money


class CategorySpendCalculator:
    def __init__(self, categories: Iterable[Any], transactions: Iterable[Any]):
        self._categories = list(categories)
        self._by_id = {category.id: category for category in self._categories}

        totals: Dict[Hashable, Money] = defaultdict(Money.zero)
        uncategorized = Money.zero()
        for tx in transactions:
            # Transactions pointing at a category outside the set count as
            # uncategorized so the per-category sums always reconcile with
            # the overall total.
            if tx.category_id is not None and tx.category_id in self._by_id:
                totals[tx.category_id] = totals[tx.category_id] + tx.amount
            else:
                uncategorized = uncategorized + tx.amount

        self._spend = {category.id: totals.get(category.id, Money.zero()) for category in self._categories}
        self._uncategorized = uncategorized

    def spend_by_category(self) -> Dict[Hashable, Money]:
        return dict(self._spend)

    def uncategorized_total(self) -> Money:
        return self._uncategorized

    def spent(self, category_id: Hashable) -> Money:
        self._category(category_id)
        return self._spend[category_id]

    def allocated(self, category_id: Hashable) -> Money:
        return Money.of(self._category(category_id).allocated_amount)

    def is_over_budget(self, category_id: Hashable) -> bool:
        return self.spent(category_id) > self.allocated(category_id)

    def overage_amount(self, category_id: Hashable) -> Money:
        return (self.spent(category_id) - self.allocated(category_id)).floor_zero()

    def breakdown(self) -> List[CategorySpend]:
        """One row per category, in the order the categories were given."""
        rows = []
        for category in self._categories:
            allocated = Money.of(category.allocated_amount)
            spent = self._spend[category.id]
            percent_used = None
            if allocated.is_positive():
                percent_used = spent.amount / allocated.amount * HUNDRED
            rows.append(
                CategorySpend(
                    category_id=category.id,
                    name=category.name,
                    color=getattr(category, "color", None),
                    allocated=allocated,
                    spent=spent,
                    remaining=allocated - spent,
                    percent_used=percent_used,
                    is_over_budget=spent > allocated,
                    overage=(spent - allocated).floor_zero(),
                )
            )
        return rows

    def _category(self, category_id: Hashable) -> Any:
        try:
            return self._by_id[category_id]
        except KeyError:
            raise NotFound(f"Category {category_id} not found") from None
