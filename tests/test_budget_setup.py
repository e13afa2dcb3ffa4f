from decimal import Decimal

import pytest

from app.core.exceptions import InvalidAmount
from app.utils.budget_setup import BudgetSetupPlanner
from app.utils.money import Money


def test_default_plan():
    plan = BudgetSetupPlanner(income="5000", savings_percentage=10, groceries_allocation="500", contingency_percentage=10).derive()

    assert plan.savings_amount.to_display() == "500.00"
    assert plan.contingency_amount.to_display() == "500.00"
    assert plan.remaining.to_display() == "3500.00"
    assert not plan.has_deficit

    seeds = [(s.name, s.allocated_amount.to_display()) for s in plan.seed_categories]
    assert seeds == [
        ("Savings", "500.00"),
        ("Groceries", "500.00"),
        ("Bills", "0.00"),
        ("Transport", "0.00"),
        ("Entertainment", "0.00"),
        ("Contingency", "500.00"),
    ]
    assert all(s.is_system for s in plan.seed_categories)
    assert len({s.color for s in plan.seed_categories}) == 6


def test_deficit_is_reported_not_refused():
    plan = BudgetSetupPlanner("1000", 50, "400", 20).derive()
    assert plan.remaining == Money.of(-100)
    assert plan.has_deficit


def test_fractional_percentages_keep_precision():
    plan = BudgetSetupPlanner("1234.56", Decimal("12.5"), "0", 0).derive()
    assert plan.savings_amount.amount == Decimal("154.32")
    assert plan.remaining == Money.of("1080.24")


@pytest.mark.parametrize(
    "income, savings, groceries, contingency",
    [
        ("0", 10, "500", 10),
        ("-1", 10, "500", 10),
        ("5000", 101, "500", 10),
        ("5000", 10, "500", -1),
        ("5000", 10, "-0.01", 10),
        ("abc", 10, "500", 10),
    ],
)
def test_invalid_inputs(income, savings, groceries, contingency):
    with pytest.raises(InvalidAmount):
        BudgetSetupPlanner(income, savings, groceries, contingency)
