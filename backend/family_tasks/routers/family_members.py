from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from family_tasks.core.rpc import ProcedureRouter
from family_tasks.schemas.common import DeleteInput, SuccessResponse
from family_tasks.schemas.family_member import (
    FamilyMemberCreate,
    FamilyMemberResponse,
    FamilyMemberUpdate,
)
from family_tasks.services import family_members as member_service

router = ProcedureRouter()


@router.mutation("createFamilyMember", FamilyMemberCreate, FamilyMemberResponse)
async def create_family_member(db: AsyncSession, member_in: FamilyMemberCreate):
    return await member_service.create_family_member(db, member_in)


@router.query("getFamilyMembers", List[FamilyMemberResponse])
async def get_family_members(db: AsyncSession):
    return await member_service.get_family_members(db)


@router.mutation("updateFamilyMember", FamilyMemberUpdate, FamilyMemberResponse)
async def update_family_member(db: AsyncSession, member_in: FamilyMemberUpdate):
    return await member_service.update_family_member(db, member_in)


@router.mutation("deleteFamilyMember", DeleteInput, SuccessResponse)
async def delete_family_member(db: AsyncSession, target: DeleteInput):
    return {"success": await member_service.delete_family_member(db, target.id)}
