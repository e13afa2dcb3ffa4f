import uuid
from datetime import date
from decimal import Decimal

import pytest

from app.core.exceptions import DivisionByZero, NotApplicable
from app.schemas.budget import BudgetRead
from app.schemas.category import CategoryRead
from app.schemas.goal import GoalRead
from app.schemas.transaction import TransactionRead
from app.utils.budgeting import BudgetSummary
from app.utils.money import Money


def make_budget(income="5000.00", savings="10"):
    return BudgetRead(
        month=date(2026, 3, 1),
        income=Decimal(income),
        savings_percentage=Decimal(savings),
        groceries_allocation=Decimal("500"),
        contingency_percentage=Decimal("10"),
    )


def make_category(name, allocated):
    return CategoryRead(id=uuid.uuid4(), name=name, allocated_amount=Decimal(allocated), color="#3b82f6")


def make_tx(amount, category=None, day=10):
    return TransactionRead(
        id=uuid.uuid4(),
        category_id=category.id if category else None,
        amount=Decimal(amount),
        transaction_date=date(2026, 3, day),
    )


def make_goal(target, current, active=True):
    return GoalRead(
        id=uuid.uuid4(),
        name="Trip",
        target_amount=Decimal(target),
        current_amount=Decimal(current),
        is_active=active,
    )


@pytest.fixture
def summary():
    groceries = make_category("Groceries", "500.00")
    bills = make_category("Bills", "1200.00")
    txs = [make_tx("200.00", groceries, 3), make_tx("350.00", groceries, 12), make_tx("80.00", None, 7)]
    goals = [make_goal("1000", "250"), make_goal("400", "100"), make_goal("9000", "9000", active=False)]
    return BudgetSummary(make_budget(), [groceries, bills], txs, goals)


def test_totals(summary):
    assert summary.total_spent() == Money.of("630.00")
    assert summary.total_allocated() == Money.of("1700.00")
    assert summary.remaining_budget() == Money.of("4370.00")
    assert summary.savings_target().to_display() == "500.00"


def test_spent_ratio(summary):
    assert summary.spent_ratio() == Decimal("0.126")
    assert summary.spent_percentage() == Decimal("12.6")


def test_goals_totals_only_count_active_goals(summary):
    totals = summary.goals_totals()
    assert totals.target == Money.of(1400)
    assert totals.current == Money.of(350)
    assert len(summary.active_goals()) == 2


def test_remaining_goes_negative_when_overspent():
    summary = BudgetSummary(make_budget(income="100.00"), [], [make_tx("60.00"), make_tx("70.00")])
    assert summary.remaining_budget() == Money.of("-30.00")
    assert summary.remaining_budget() == summary.income - summary.total_spent()


def test_category_overage_and_whole_budget_remainder_are_independent(summary):
    spending = summary.category_spending()
    groceries = summary.categories[0]
    assert spending.is_over_budget(groceries.id)
    assert not summary.remaining_budget().is_negative()


def test_zero_income_makes_ratio_not_applicable():
    summary = BudgetSummary(make_budget(income="0"), [], [make_tx("10.00")])
    with pytest.raises(NotApplicable):
        summary.spent_ratio()
    with pytest.raises(DivisionByZero):
        summary.spent_ratio()
    assert summary.spent_percentage() is None
    assert summary.remaining_budget() == Money.of("-10.00")


def test_empty_month():
    summary = BudgetSummary(make_budget(), [], [])
    assert summary.total_spent() == Money.zero()
    assert summary.goals_totals().target == Money.zero()
    assert summary.recent_transactions() == []


def test_recent_transactions_newest_first(summary):
    recent = summary.recent_transactions(limit=2)
    assert [tx.transaction_date.day for tx in recent] == [12, 7]


def test_repeated_computation_is_identical(summary):
    first = (summary.total_spent(), summary.category_spending().breakdown(), summary.goals_totals())
    second = (summary.total_spent(), summary.category_spending().breakdown(), summary.goals_totals())
    assert first == second
