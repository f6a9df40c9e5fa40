"""Seed dataset shown when the API cannot be reached."""

from datetime import datetime
from typing import List

from family_tasks.schemas.category import CategoryResponse
from family_tasks.schemas.family_member import FamilyMemberResponse
from family_tasks.schemas.task import TaskResponse

_SEEDED = datetime(2024, 1, 1)


def demo_family_members() -> List[FamilyMemberResponse]:
    return [
        FamilyMemberResponse(id=1, name="Mom", email="mom@family.com", avatar_url=None, created_at=_SEEDED),
        FamilyMemberResponse(id=2, name="Dad", email="dad@family.com", avatar_url=None, created_at=_SEEDED),
        FamilyMemberResponse(id=3, name="Alice", email="alice@family.com", avatar_url=None, created_at=_SEEDED),
        FamilyMemberResponse(id=4, name="Bob", email=None, avatar_url=None, created_at=_SEEDED),
    ]


def demo_categories() -> List[CategoryResponse]:
    return [
        CategoryResponse(
            id=1, name="Chores", description="Household cleaning and maintenance",
            color="#10b981", created_at=_SEEDED,
        ),
        CategoryResponse(
            id=2, name="Shopping", description="Grocery and other shopping tasks",
            color="#3b82f6", created_at=_SEEDED,
        ),
        CategoryResponse(
            id=3, name="School", description="School-related tasks and activities",
            color="#f59e0b", created_at=_SEEDED,
        ),
        CategoryResponse(
            id=4, name="Personal", description="Individual tasks and goals",
            color="#8b5cf6", created_at=_SEEDED,
        ),
    ]


def _task(id, title, description, due_date, is_completed, assigned_to, category_id, created_at, updated_at=None):
    return TaskResponse(
        id=id,
        title=title,
        description=description,
        due_date=due_date,
        is_completed=is_completed,
        assigned_to=assigned_to,
        category_id=category_id,
        created_at=created_at,
        updated_at=updated_at or created_at,
    )


def demo_tasks() -> List[TaskResponse]:
    return [
        _task(1, "Clean the kitchen", "Wash dishes, wipe counters, and mop floor",
              datetime(2024, 12, 25), False, 1, 1, datetime(2024, 12, 20)),
        _task(2, "Buy groceries", "Milk, eggs, bread, and vegetables",
              datetime(2024, 12, 24), True, 2, 2, datetime(2024, 12, 19), datetime(2024, 12, 23)),
        _task(3, "Finish homework", "Math problems and history essay",
              datetime(2024, 12, 22), False, 3, 3, datetime(2024, 12, 21)),
        _task(4, "Walk the dog", None, None, False, 4, 4, datetime(2024, 12, 20)),
        _task(5, "Vacuum living room", "Don't forget under the couch!",
              datetime(2024, 12, 21), False, 1, 1, datetime(2024, 12, 18)),
    ]
