# app/crud/category.py
from datetime import datetime, timedelta
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from app.models.category import Category
from typing import Iterable, List, Optional
import uuid
from app.schemas.category import CategoryCreate, CategoryUpdate
from app.utils.budget_setup import SeedCategory

async def get_categories_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[Category]:
    result = await db.execute(
        select(Category).where(Category.user_id == user_id).order_by(Category.created_at, Category.name)
    )
    return result.scalars().all()

async def get_category_by_id(category_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Category]:
    result = await db.execute(
        select(Category).where(Category.id == category_id, Category.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def create_category_for_user(user_id: uuid.UUID, cat_in: CategoryCreate, db: AsyncSession) -> Category:
    new_cat = Category(**cat_in.model_dump(), user_id=user_id, is_system=False)
    db.add(new_cat)
    await db.commit()
    await db.refresh(new_cat)
    return new_cat

async def create_seed_categories_for_user(
    user_id: uuid.UUID,
    seeds: Iterable[SeedCategory],
    db: AsyncSession,
) -> List[Category]:
    """
    Batch-insert the categories produced by the budget setup planner, keeping
    their order. Categories outlive a single month, so names the user already
    has are skipped.

    Returns the list of categories that were created.
    """
    result = await db.execute(select(Category.name).where(Category.user_id == user_id))
    existing_names_lower = {row[0].lower() for row in result.all()}
    seeds = [seed for seed in seeds if seed.name.lower() not in existing_names_lower]

    now = datetime.utcnow()
    new_instances = [
        Category(
            user_id=user_id,
            name=seed.name,
            allocated_amount=seed.allocated_amount.amount,
            color=seed.color,
            is_system=seed.is_system,
            # Distinct timestamps so listing by created_at keeps the seed order
            created_at=now + timedelta(microseconds=position),
        )
        for position, seed in enumerate(seeds)
    ]
    db.add_all(new_instances)
    # Also commits anything the caller flushed, e.g. the new month's budget
    await db.commit()
    for inst in new_instances:
        await db.refresh(inst)
    return new_instances

async def update_category(category: Category, cat_in: CategoryUpdate, db: AsyncSession) -> Category:
    for field, value in cat_in.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(category, field, value)
    db.add(category)
    await db.commit()
    await db.refresh(category)
    return category

async def delete_category(category: Category, db: AsyncSession) -> None:
    await db.delete(category)
    await db.commit()
