import uuid
from datetime import date
from decimal import Decimal

import pytest

from app.core.exceptions import NotFound
from app.schemas.category import CategoryRead
from app.schemas.transaction import TransactionRead
from app.utils.money import Money
from app.utils.spending import CategorySpendCalculator


def make_category(name, allocated, color="#f59e0b"):
    return CategoryRead(id=uuid.uuid4(), name=name, allocated_amount=Decimal(allocated), color=color)


def make_tx(amount, category=None, day=date(2026, 3, 10)):
    return TransactionRead(
        id=uuid.uuid4(),
        category_id=category.id if category else None,
        amount=Decimal(amount),
        transaction_date=day,
    )


def test_groceries_over_budget():
    groceries = make_category("Groceries", "500.00")
    calc = CategorySpendCalculator([groceries], [make_tx("200.00", groceries), make_tx("350.00", groceries)])

    assert calc.spent(groceries.id) == Money.of("550.00")
    assert calc.is_over_budget(groceries.id) is True
    assert calc.overage_amount(groceries.id).to_display() == "50.00"


def test_exactly_at_allocation_is_not_over_budget():
    bills = make_category("Bills", "100.00")
    calc = CategorySpendCalculator([bills], [make_tx("100.00", bills)])
    assert calc.is_over_budget(bills.id) is False
    assert calc.overage_amount(bills.id) == Money.zero()


def test_categories_without_transactions_map_to_zero():
    transport = make_category("Transport", "50")
    calc = CategorySpendCalculator([transport], [])
    assert calc.spend_by_category() == {transport.id: Money.zero()}


def test_uncategorized_transactions_are_kept_apart():
    food = make_category("Food", "300")
    stray = make_category("Deleted", "0")
    txs = [make_tx("10.00"), make_tx("20.00", food), make_tx("5.00", stray)]
    calc = CategorySpendCalculator([food], txs)

    assert calc.spend_by_category() == {food.id: Money.of("20.00")}
    # points at a category outside the set
    assert calc.uncategorized_total() == Money.of("15.00")


def test_sums_reconcile_with_total():
    a, b = make_category("A", "100"), make_category("B", "0")
    txs = [make_tx("1.11", a), make_tx("2.22", b), make_tx("3.33"), make_tx("4.44", a)]
    calc = CategorySpendCalculator([a, b], txs)

    per_category = Money.sum(calc.spend_by_category().values())
    assert per_category + calc.uncategorized_total() == Money.sum(tx.amount for tx in txs)


def test_transaction_order_does_not_matter():
    a = make_category("A", "100")
    txs = [make_tx("0.10", a), make_tx("0.20", a), make_tx("0.30", a)]
    forward = CategorySpendCalculator([a], txs).spend_by_category()
    backward = CategorySpendCalculator([a], list(reversed(txs))).spend_by_category()
    assert forward == backward == {a.id: Money.of("0.60")}


def test_breakdown_rows():
    groceries = make_category("Groceries", "500.00")
    bills = make_category("Bills", "0", color="#ef4444")
    rows = CategorySpendCalculator([groceries, bills], [make_tx("125.00", groceries)]).breakdown()

    assert [row.name for row in rows] == ["Groceries", "Bills"]
    assert rows[0].percent_used == Decimal(25)
    assert rows[0].remaining == Money.of("375.00")
    assert rows[1].percent_used is None
    assert rows[1].color == "#ef4444"


def test_unknown_category_raises_not_found():
    calc = CategorySpendCalculator([], [])
    with pytest.raises(NotFound):
        calc.spent(uuid.uuid4())
