from datetime import date
from decimal import Decimal

import pytest

from app.core.db_utils import with_db_retry
from app.core.exceptions import ConcurrencyConflict, NotFound
from app.crud.budget import create_budget_for_user, get_budget_for_month
from app.crud.category import (
    create_category_for_user,
    create_seed_categories_for_user,
    delete_category,
    get_categories_for_user,
)
from app.crud.goal import (
    add_contribution,
    create_goal_for_user,
    deactivate_goal,
    get_active_goals_for_user,
    get_goal_by_id,
    update_goal,
)
from app.crud.transaction import (
    create_transaction_for_user,
    get_transaction_by_id,
    get_transactions_for_month,
    update_transaction,
)
from app.schemas.category import CategoryCreate
from app.schemas.goal import GoalCreate, GoalUpdate
from app.schemas.transaction import TransactionCreate, TransactionUpdate
from app.utils.budget_setup import BudgetSetupPlanner
from app.utils.money import Money

MARCH = date(2026, 3, 1)


def default_plan():
    return BudgetSetupPlanner("5000", 10, "500", 10).derive()


async def test_budget_is_stored_on_the_first_of_the_month(db, user):
    await create_budget_for_user(user.id, date(2026, 3, 17), default_plan(), db)
    budget = await get_budget_for_month(user.id, date(2026, 3, 2), db)
    assert budget.month == MARCH
    assert budget.income == Decimal("5000.00")


async def test_second_budget_for_the_same_month_conflicts(db, user):
    await create_budget_for_user(user.id, MARCH, default_plan(), db)
    with pytest.raises(ConcurrencyConflict):
        await create_budget_for_user(user.id, MARCH, default_plan(), db)


async def test_budgets_are_scoped_by_user(db, user, other_user):
    await create_budget_for_user(user.id, MARCH, default_plan(), db)
    assert await get_budget_for_month(other_user.id, MARCH, db) is None


async def test_seed_categories_keep_order_and_skip_existing_names(db, user):
    await create_category_for_user(user.id, CategoryCreate(name="groceries", allocated_amount="300"), db)

    created = await create_seed_categories_for_user(user.id, default_plan().seed_categories, db)
    assert [c.name for c in created] == ["Savings", "Bills", "Transport", "Entertainment", "Contingency"]
    assert all(c.is_system for c in created)

    names = [c.name for c in await get_categories_for_user(user.id, db)]
    assert names == ["groceries", "Savings", "Bills", "Transport", "Entertainment", "Contingency"]

    assert await create_seed_categories_for_user(user.id, default_plan().seed_categories, db) == []


async def test_transactions_for_month_are_bounded_and_newest_first(db, user):
    for day in [date(2026, 2, 28), date(2026, 3, 1), date(2026, 3, 31), date(2026, 4, 1)]:
        await create_transaction_for_user(user.id, TransactionCreate(amount="10", transaction_date=day), db)

    txs = await get_transactions_for_month(user.id, MARCH, db)
    assert [tx.transaction_date for tx in txs] == [date(2026, 3, 31), date(2026, 3, 1)]


async def test_update_transaction_can_clear_category(db, user):
    category = await create_category_for_user(user.id, CategoryCreate(name="Food"), db)
    tx = await create_transaction_for_user(
        user.id, TransactionCreate(amount="12.50", category_id=category.id, transaction_date=MARCH), db
    )
    tx = await update_transaction(tx, TransactionUpdate(category_id=None), db)
    assert tx.category_id is None
    assert tx.amount == Decimal("12.50")


async def test_deleting_a_category_uncategorizes_its_transactions(db, session_factory, user):
    category = await create_category_for_user(user.id, CategoryCreate(name="Fun"), db)
    tx = await create_transaction_for_user(
        user.id, TransactionCreate(amount="40", category_id=category.id, transaction_date=MARCH), db
    )
    await delete_category(category, db)

    async with session_factory() as fresh:
        reloaded = await get_transaction_by_id(tx.id, user.id, fresh)
    assert reloaded is not None
    assert reloaded.category_id is None


async def test_contribution_increments_saved_amount(db, user):
    goal = await create_goal_for_user(user.id, GoalCreate(name="Trip", target_amount="1000"), db)
    goal = await add_contribution(goal.id, user.id, Money.of("250.25"), db)
    assert goal.current_amount == Decimal("250.25")
    assert goal.version == 2


async def test_contributions_from_stale_reads_are_not_lost(session_factory, db, user):
    goal = await create_goal_for_user(user.id, GoalCreate(name="Car", target_amount="10000"), db)

    async with session_factory() as first, session_factory() as second:
        # both sessions hold the goal at current_amount=0 before either writes
        await get_goal_by_id(goal.id, user.id, first)
        await get_goal_by_id(goal.id, user.id, second)

        await add_contribution(goal.id, user.id, Money.of("10"), first)
        result = await add_contribution(goal.id, user.id, Money.of("20.50"), second)

    assert result.current_amount == Decimal("30.50")
    reloaded = await get_goal_by_id(goal.id, user.id, db)
    assert reloaded.current_amount == Decimal("30.50")


async def test_contribution_to_missing_goal(db, user, other_user):
    goal = await create_goal_for_user(user.id, GoalCreate(name="Trip", target_amount="1000"), db)
    with pytest.raises(NotFound):
        await add_contribution(goal.id, other_user.id, Money.of(5), db)


async def test_deactivated_goal_drops_out_but_is_kept(db, user):
    goal = await create_goal_for_user(user.id, GoalCreate(name="Trip", target_amount="1000"), db)
    await deactivate_goal(goal.id, user.id, db)

    assert await get_active_goals_for_user(user.id, db) == []
    assert await get_goal_by_id(goal.id, user.id, db) is None
    kept = await get_goal_by_id(goal.id, user.id, db, include_inactive=True)
    assert kept.is_active is False

    with pytest.raises(NotFound):
        await deactivate_goal(goal.id, user.id, db)
    with pytest.raises(NotFound):
        await add_contribution(goal.id, user.id, Money.of(5), db)


async def test_update_goal_bumps_version(db, user):
    goal = await create_goal_for_user(user.id, GoalCreate(name="Trip", target_amount="1000"), db)
    updated = await update_goal(goal.id, user.id, GoalUpdate(monthly_allocation="125", deadline=date(2027, 1, 1)), db)
    assert updated.monthly_allocation == Decimal("125")
    assert updated.deadline == date(2027, 1, 1)
    assert updated.version == 2


async def test_update_missing_goal(db, user):
    goal = await create_goal_for_user(user.id, GoalCreate(name="Trip", target_amount="1000"), db)
    await deactivate_goal(goal.id, user.id, db)
    with pytest.raises(NotFound):
        await update_goal(goal.id, user.id, GoalUpdate(name="Other"), db)


async def test_retry_gives_up_after_max_retries():
    calls = []

    @with_db_retry(max_retries=2, retry_delay=0)
    async def always_conflicts():
        calls.append(1)
        raise ConcurrencyConflict("lost the race")

    with pytest.raises(ConcurrencyConflict):
        await always_conflicts()
    assert len(calls) == 3


async def test_retry_recovers_from_a_conflict():
    calls = []

    @with_db_retry(max_retries=3, retry_delay=0)
    async def conflicts_once():
        calls.append(1)
        if len(calls) == 1:
            raise ConcurrencyConflict("lost the race")
        return "ok"

    assert await conflicts_once() == "ok"
    assert len(calls) == 2


async def test_retry_ignores_other_errors():
    calls = []

    @with_db_retry(max_retries=3, retry_delay=0)
    async def broken():
        calls.append(1)
        raise NotFound("Goal not found")

    with pytest.raises(NotFound):
        await broken()
    assert len(calls) == 1


async def test_flushed_budget_is_discarded_on_rollback(db, user):
    await create_budget_for_user(user.id, MARCH, default_plan(), db, commit=False)
    await db.rollback()
    assert await get_budget_for_month(user.id, MARCH, db) is None


async def test_seeding_commits_a_flushed_budget(db, session_factory, user):
    await create_budget_for_user(user.id, MARCH, default_plan(), db, commit=False)
    await create_seed_categories_for_user(user.id, default_plan().seed_categories, db)

    async with session_factory() as fresh:
        assert await get_budget_for_month(user.id, MARCH, fresh) is not None
