import logging
from typing import List

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from family_tasks.core.errors import NotFoundError
from family_tasks.core.timestamps import utcnow
from family_tasks.models.category import Category
from family_tasks.models.task import Task
from family_tasks.schemas.category import CategoryCreate, CategoryUpdate
from family_tasks.schemas.common import patch_fields

from .common import store_errors

logger = logging.getLogger(__name__)


async def create_category(db: AsyncSession, data: CategoryCreate) -> Category:
    async with store_errors(db, "create category"):
        category = Category(
            name=data.name,
            description=data.description,
            color=data.color,
            created_at=utcnow(),
        )
        db.add(category)
        await db.commit()
        await db.refresh(category)
    logger.info("Category created id=%s", category.id)
    return category


async def get_categories(db: AsyncSession) -> List[Category]:
    async with store_errors(db, "fetch categories"):
        result = await db.execute(select(Category).execution_options(populate_existing=True))
        return list(result.scalars().all())


async def update_category(db: AsyncSession, data: CategoryUpdate) -> Category:
    changes = patch_fields(data)
    async with store_errors(db, "update category"):
        category = await db.get(Category, data.id, populate_existing=True)
        if category is None:
            raise NotFoundError(f"Category with id {data.id} not found")
        for field, value in changes.items():
            setattr(category, field, value)
        await db.commit()
        await db.refresh(category)
    return category


async def delete_category(db: AsyncSession, category_id: int) -> bool:
    """Clear the category from its tasks, then remove it. Missing rows are a no-op."""
    async with store_errors(db, "delete category"):
        detached = await db.execute(
            update(Task).where(Task.category_id == category_id).values(category_id=None)
        )
        deleted = await db.execute(delete(Category).where(Category.id == category_id))
        await db.commit()
    logger.info(
        "Category delete id=%s removed=%s uncategorized_tasks=%s",
        category_id,
        deleted.rowcount,
        detached.rowcount,
    )
    return True
