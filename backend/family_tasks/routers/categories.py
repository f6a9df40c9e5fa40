from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from family_tasks.core.rpc import ProcedureRouter
from family_tasks.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from family_tasks.schemas.common import DeleteInput, SuccessResponse
from family_tasks.services import categories as category_service

router = ProcedureRouter()


@router.mutation("createCategory", CategoryCreate, CategoryResponse)
async def create_category(db: AsyncSession, category_in: CategoryCreate):
    return await category_service.create_category(db, category_in)


@router.query("getCategories", List[CategoryResponse])
async def get_categories(db: AsyncSession):
    return await category_service.get_categories(db)


@router.mutation("updateCategory", CategoryUpdate, CategoryResponse)
async def update_category(db: AsyncSession, category_in: CategoryUpdate):
    return await category_service.update_category(db, category_in)


@router.mutation("deleteCategory", DeleteInput, SuccessResponse)
async def delete_category(db: AsyncSession, target: DeleteInput):
    return {"success": await category_service.delete_category(db, target.id)}
