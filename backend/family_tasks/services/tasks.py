import logging
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from family_tasks.core.errors import NotFoundError
from family_tasks.core.timestamps import touch, utcnow
from family_tasks.models.task import Task
from family_tasks.schemas.common import patch_fields
from family_tasks.schemas.task import TaskCompletionToggle, TaskCreate, TaskUpdate

from .common import store_errors

logger = logging.getLogger(__name__)


async def create_task(db: AsyncSession, data: TaskCreate) -> Task:
    # References are soft: the ids are stored as given, not checked.
    now = utcnow()
    async with store_errors(db, "create task"):
        task = Task(
            title=data.title,
            description=data.description,
            due_date=data.due_date,
            is_completed=False,
            assigned_to=data.assigned_to,
            category_id=data.category_id,
            created_at=now,
            updated_at=now,
        )
        db.add(task)
        await db.commit()
        await db.refresh(task)
    logger.info("Task created id=%s assigned_to=%s", task.id, task.assigned_to)
    return task


async def get_tasks(db: AsyncSession) -> List[Task]:
    async with store_errors(db, "fetch tasks"):
        result = await db.execute(select(Task).execution_options(populate_existing=True))
        return list(result.scalars().all())


async def _load_task(db: AsyncSession, task_id: int) -> Task:
    task = await db.get(Task, task_id, populate_existing=True)
    if task is None:
        raise NotFoundError(f"Task with id {task_id} not found")
    return task


async def update_task(db: AsyncSession, data: TaskUpdate) -> Task:
    changes = patch_fields(data)
    async with store_errors(db, "update task"):
        task = await _load_task(db, data.id)
        for field, value in changes.items():
            setattr(task, field, value)
        # Always refreshed, even for an empty patch.
        task.updated_at = touch(task.updated_at)
        await db.commit()
        await db.refresh(task)
    return task


async def toggle_task_completion(db: AsyncSession, data: TaskCompletionToggle) -> Task:
    async with store_errors(db, "toggle task completion"):
        task = await _load_task(db, data.id)
        task.is_completed = data.is_completed
        task.updated_at = touch(task.updated_at)
        await db.commit()
        await db.refresh(task)
    logger.debug("Task id=%s is_completed=%s", task.id, task.is_completed)
    return task


async def delete_task(db: AsyncSession, task_id: int) -> bool:
    async with store_errors(db, "delete task"):
        result = await db.execute(delete(Task).where(Task.id == task_id))
        await db.commit()
    logger.info("Task delete id=%s removed=%s", task_id, result.rowcount)
    return True
