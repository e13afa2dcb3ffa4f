# app/api/v1/routes/goals.py
from datetime import date
from typing import List
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.schemas.goal import GoalContribution, GoalCreate, GoalProgressResponse, GoalRead, GoalUpdate
from app.crud.goal import (
    add_contribution,
    create_goal_for_user,
    deactivate_goal,
    get_active_goals_for_user,
    get_goal_by_id,
    update_goal,
)
from app.core.database import get_async_session
from app.models.user import User
from app.api.deps import get_current_user
from app.utils.goals import GoalProgressCalculator
from app.utils.money import Money

router = APIRouter(prefix="/goals", tags=["goals"])


def goal_progress_view(goal: GoalRead, today: date) -> GoalProgressResponse:
    calculator = GoalProgressCalculator(goal)
    return GoalProgressResponse(
        id=goal.id,
        name=goal.name,
        target_amount=calculator.target.to_display(),
        current_amount=calculator.current.to_display(),
        monthly_allocation=calculator.monthly_allocation.to_display(),
        deadline=goal.deadline,
        percent_complete=float(round(calculator.percent_complete(), 1)),
        remaining_amount=calculator.remaining().to_display(),
        months_remaining=calculator.months_remaining(),
        projected_completion=calculator.projected_completion(today),
        on_track=calculator.on_track(today),
        is_complete=calculator.is_complete(),
    )


@router.get("", response_model=List[GoalProgressResponse])
async def read_goals(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """
    Active goals with their progress.

    - **percent_complete**: may exceed 100 when a goal is over-saved
    - **remaining_amount**: negative when over-saved
    - **months_remaining**: null when the goal has no monthly allocation
    """
    today = date.today()
    goals = await get_active_goals_for_user(user.id, db)
    return [goal_progress_view(GoalRead.model_validate(g), today) for g in goals]

@router.post("", response_model=GoalProgressResponse, status_code=status.HTTP_201_CREATED)
async def create_goal(
    goal_in: GoalCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    goal = await create_goal_for_user(user.id, goal_in, db)
    return goal_progress_view(GoalRead.model_validate(goal), date.today())

@router.get("/{goal_id}", response_model=GoalProgressResponse)
async def read_goal(
    goal_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    goal = await get_goal_by_id(goal_id, user.id, db)
    if not goal:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Goal not found")
    return goal_progress_view(GoalRead.model_validate(goal), date.today())

@router.patch("/{goal_id}", response_model=GoalProgressResponse)
async def update_goal_endpoint(
    goal_id: uuid.UUID,
    goal_in: GoalUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    goal = await update_goal(goal_id, user.id, goal_in, db)
    return goal_progress_view(GoalRead.model_validate(goal), date.today())

@router.delete("/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_goal_endpoint(
    goal_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """Deactivates the goal; it disappears from lists and totals."""
    await deactivate_goal(goal_id, user.id, db)
    return None

@router.post("/{goal_id}/contributions", response_model=GoalProgressResponse)
async def contribute_to_goal(
    goal_id: uuid.UUID,
    contribution: GoalContribution,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    goal = await add_contribution(goal_id, user.id, Money.of(contribution.amount), db)
    return goal_progress_view(GoalRead.model_validate(goal), date.today())
