from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from family_tasks.core.rpc import ProcedureRouter
from family_tasks.schemas.common import DeleteInput, SuccessResponse
from family_tasks.schemas.task import TaskCompletionToggle, TaskCreate, TaskResponse, TaskUpdate
from family_tasks.services import tasks as task_service

router = ProcedureRouter()


@router.mutation("createTask", TaskCreate, TaskResponse)
async def create_task(db: AsyncSession, task_in: TaskCreate):
    return await task_service.create_task(db, task_in)


@router.query("getTasks", List[TaskResponse])
async def get_tasks(db: AsyncSession):
    return await task_service.get_tasks(db)


@router.mutation("updateTask", TaskUpdate, TaskResponse)
async def update_task(db: AsyncSession, task_in: TaskUpdate):
    return await task_service.update_task(db, task_in)


@router.mutation("deleteTask", DeleteInput, SuccessResponse)
async def delete_task(db: AsyncSession, target: DeleteInput):
    return {"success": await task_service.delete_task(db, target.id)}


@router.mutation("toggleTaskCompletion", TaskCompletionToggle, TaskResponse)
async def toggle_task_completion(db: AsyncSession, toggle: TaskCompletionToggle):
    return await task_service.toggle_task_completion(db, toggle)
