import logging
from typing import List

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from family_tasks.core.errors import NotFoundError
from family_tasks.core.timestamps import utcnow
from family_tasks.models.family_member import FamilyMember
from family_tasks.models.task import Task
from family_tasks.schemas.common import patch_fields
from family_tasks.schemas.family_member import FamilyMemberCreate, FamilyMemberUpdate

from .common import store_errors

logger = logging.getLogger(__name__)


async def create_family_member(db: AsyncSession, data: FamilyMemberCreate) -> FamilyMember:
    async with store_errors(db, "create family member"):
        member = FamilyMember(
            name=data.name,
            email=data.email,
            avatar_url=data.avatar_url,
            created_at=utcnow(),
        )
        db.add(member)
        await db.commit()
        await db.refresh(member)
    logger.info("Family member created id=%s", member.id)
    return member


async def get_family_members(db: AsyncSession) -> List[FamilyMember]:
    async with store_errors(db, "fetch family members"):
        result = await db.execute(
            select(FamilyMember).execution_options(populate_existing=True)
        )
        return list(result.scalars().all())


async def update_family_member(db: AsyncSession, data: FamilyMemberUpdate) -> FamilyMember:
    changes = patch_fields(data)
    async with store_errors(db, "update family member"):
        member = await db.get(FamilyMember, data.id, populate_existing=True)
        if member is None:
            raise NotFoundError(f"Family member with id {data.id} not found")
        for field, value in changes.items():
            setattr(member, field, value)
        await db.commit()
        await db.refresh(member)
    return member


async def delete_family_member(db: AsyncSession, member_id: int) -> bool:
    """
    Unassign the member's tasks, then remove the member, in one transaction.

    Deleting a member that does not exist is a successful no-op.
    """
    async with store_errors(db, "delete family member"):
        unassigned = await db.execute(
            update(Task).where(Task.assigned_to == member_id).values(assigned_to=None)
        )
        deleted = await db.execute(delete(FamilyMember).where(FamilyMember.id == member_id))
        await db.commit()
    logger.info(
        "Family member delete id=%s removed=%s unassigned_tasks=%s",
        member_id,
        deleted.rowcount,
        unassigned.rowcount,
    )
    return True
