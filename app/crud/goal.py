# app/crud/goal.py
import logging
from datetime import datetime
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm.exc import StaleDataError
from app.core.db_utils import with_db_retry
from app.core.exceptions import ConcurrencyConflict, NotFound
from app.models.goal import Goal
from typing import List, Optional
import uuid
from app.schemas.goal import GoalCreate, GoalRead, GoalUpdate
from app.utils.goals import GoalProgressCalculator
from app.utils.money import Money

logger = logging.getLogger(__name__)

async def get_active_goals_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[Goal]:
    result = await db.execute(
        select(Goal)
        .where(Goal.user_id == user_id, Goal.is_active.is_(True))
        .order_by(Goal.created_at)
    )
    return result.scalars().all()

async def get_goal_by_id(
    goal_id: uuid.UUID,
    user_id: uuid.UUID,
    db: AsyncSession,
    include_inactive: bool = False,
) -> Optional[Goal]:
    query = select(Goal).where(Goal.id == goal_id, Goal.user_id == user_id)
    if not include_inactive:
        query = query.where(Goal.is_active.is_(True))
    result = await db.execute(query.execution_options(populate_existing=True))
    return result.scalar_one_or_none()

async def create_goal_for_user(user_id: uuid.UUID, goal_in: GoalCreate, db: AsyncSession) -> Goal:
    new_goal = Goal(**goal_in.model_dump(), user_id=user_id, current_amount=0, is_active=True)
    db.add(new_goal)
    await db.commit()
    await db.refresh(new_goal)
    return new_goal

@with_db_retry()
async def update_goal(goal_id: uuid.UUID, user_id: uuid.UUID, goal_in: GoalUpdate, db: AsyncSession) -> Goal:
    """
    Edit a goal's plan fields. The write is conditional on the version read,
    so a concurrent edit raises ConcurrencyConflict and the whole
    read-apply-write is retried.
    """
    goal = await get_goal_by_id(goal_id, user_id, db)
    if goal is None:
        raise NotFound("Goal not found")
    for field, value in goal_in.model_dump(exclude_unset=True).items():
        if value is None and field != "deadline":
            continue
        setattr(goal, field, value)
    db.add(goal)
    try:
        await db.commit()
    except StaleDataError as e:
        await db.rollback()
        logger.info(f"Goal {goal_id} changed during update, retrying")
        raise ConcurrencyConflict(f"Goal {goal_id} was modified concurrently") from e
    await db.refresh(goal)
    return goal

async def deactivate_goal(goal_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> None:
    """Soft delete: the row stays, but drops out of every list and total."""
    result = await db.execute(
        update(Goal)
        .where(Goal.id == goal_id, Goal.user_id == user_id, Goal.is_active.is_(True))
        .values(is_active=False, version=Goal.version + 1, updated_at=datetime.utcnow())
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        await db.rollback()
        raise NotFound("Goal not found")
    await db.commit()

async def add_contribution(goal_id: uuid.UUID, user_id: uuid.UUID, amount: Money, db: AsyncSession) -> Goal:
    """
    Add ``amount`` to the goal's saved total.

    The increment happens inside a single UPDATE statement, so concurrent
    contributions never overwrite each other.
    """
    goal = await get_goal_by_id(goal_id, user_id, db)
    if goal is None:
        raise NotFound("Goal not found")
    # Validates the amount; the UPDATE below is the atomic form of this transition
    GoalProgressCalculator(GoalRead.model_validate(goal)).contribute(amount)

    result = await db.execute(
        update(Goal)
        .where(Goal.id == goal_id, Goal.user_id == user_id, Goal.is_active.is_(True))
        .values(
            current_amount=Goal.current_amount + amount.amount,
            version=Goal.version + 1,
            updated_at=datetime.utcnow(),
        )
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        # Deactivated between the read and the write
        await db.rollback()
        raise NotFound("Goal not found")
    await db.commit()
    logger.info(f"Added {amount} to goal {goal_id}")

    goal = await get_goal_by_id(goal_id, user_id, db)
    if goal is None:
        raise NotFound("Goal not found")
    return goal
