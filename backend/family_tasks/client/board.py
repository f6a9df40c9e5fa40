"""
Client-side board state.

The board holds the three collections the UI renders plus a `demo_mode`
flag. When the API cannot be loaded the board is seeded with the demo
dataset; from then on, and whenever a single call fails, mutations are
applied to the local copy only. Nothing is reconciled with the server later.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional, TypeVar

from family_tasks.core.timestamps import to_naive_utc, touch, utcnow
from family_tasks.schemas.category import CategoryResponse
from family_tasks.schemas.family_member import FamilyMemberResponse
from family_tasks.schemas.task import TaskResponse

from .demo_data import demo_categories, demo_family_members, demo_tasks
from .rpc_client import UNSET, ClientError, FamilyTasksClient

logger = logging.getLogger(__name__)

T = TypeVar("T")

STATUS_FILTERS = ("all", "pending", "completed")


def _next_id(items) -> int:
    return max((item.id for item in items), default=0) + 1


@dataclass
class BoardStats:
    total: int
    completed: int
    pending: int
    overdue: int


@dataclass
class TaskBoard:
    client: FamilyTasksClient
    members: List[FamilyMemberResponse] = field(default_factory=list)
    categories: List[CategoryResponse] = field(default_factory=list)
    tasks: List[TaskResponse] = field(default_factory=list)
    demo_mode: bool = False

    def load(self) -> None:
        try:
            tasks = self.client.get_tasks()
            members = self.client.get_family_members()
            categories = self.client.get_categories()
        except ClientError as e:
            logger.warning("Failed to load data, switching to demo data: %s", e)
            self.load_demo_data()
            return
        self.tasks, self.members, self.categories = tasks, members, categories
        self.demo_mode = False

    def load_demo_data(self) -> None:
        self.members = demo_family_members()
        self.categories = demo_categories()
        self.tasks = demo_tasks()
        self.demo_mode = True

    def _remote(self, action: str, call: Callable[[], T]) -> Optional[T]:
        """Run a backend call; None means "apply it locally instead"."""
        if self.demo_mode:
            return None
        try:
            return call()
        except ClientError as e:
            logger.error("Failed to %s: %s", action, e)
            return None

    # ---- family members ----

    def add_member(self, name: str, email: Optional[str] = None, avatar_url: Optional[str] = None):
        member = self._remote(
            "create family member",
            lambda: self.client.create_family_member(name, email=email, avatar_url=avatar_url),
        )
        if member is None:
            member = FamilyMemberResponse(
                id=_next_id(self.members), name=name, email=email,
                avatar_url=avatar_url, created_at=utcnow(),
            )
        self.members.append(member)
        return member

    def delete_member(self, member_id: int) -> None:
        self._remote("delete family member", lambda: self.client.delete_family_member(member_id))
        # Mirror the server cascade so the local copy has no dangling references.
        self.members = [m for m in self.members if m.id != member_id]
        self.tasks = [
            t.model_copy(update={"assigned_to": None}) if t.assigned_to == member_id else t
            for t in self.tasks
        ]

    # ---- categories ----

    def add_category(self, name: str, description: Optional[str] = None, color: Optional[str] = None):
        category = self._remote(
            "create category",
            lambda: self.client.create_category(name, description=description, color=color),
        )
        if category is None:
            category = CategoryResponse(
                id=_next_id(self.categories), name=name, description=description,
                color=color, created_at=utcnow(),
            )
        self.categories.append(category)
        return category

    def delete_category(self, category_id: int) -> None:
        self._remote("delete category", lambda: self.client.delete_category(category_id))
        self.categories = [c for c in self.categories if c.id != category_id]
        self.tasks = [
            t.model_copy(update={"category_id": None}) if t.category_id == category_id else t
            for t in self.tasks
        ]

    # ---- tasks ----

    def add_task(
        self,
        title: str,
        description: Optional[str] = None,
        due_date: Optional[datetime] = None,
        assigned_to: Optional[int] = None,
        category_id: Optional[int] = None,
    ) -> TaskResponse:
        task = self._remote(
            "create task",
            lambda: self.client.create_task(
                title, description=description, due_date=due_date,
                assigned_to=assigned_to, category_id=category_id,
            ),
        )
        if task is None:
            now = utcnow()
            task = TaskResponse(
                id=_next_id(self.tasks), title=title, description=description,
                due_date=to_naive_utc(due_date), is_completed=False, assigned_to=assigned_to,
                category_id=category_id, created_at=now, updated_at=now,
            )
        self.tasks.append(task)
        return task

    def _replace_task(self, task_id: int, make: Callable[[TaskResponse], TaskResponse]) -> Optional[TaskResponse]:
        for i, task in enumerate(self.tasks):
            if task.id == task_id:
                self.tasks[i] = make(task)
                return self.tasks[i]
        return None

    def _store_task(self, task: TaskResponse) -> TaskResponse:
        """Keep a server copy of a task, adding it if the board has not loaded it yet."""
        if self._replace_task(task.id, lambda _: task) is None:
            self.tasks.append(task)
        return task

    def update_task(self, task_id: int, **changes) -> Optional[TaskResponse]:
        """Partial update: pass only the fields to change; None clears a field."""
        changes = {k: v for k, v in changes.items() if v is not UNSET}
        updated = self._remote("update task", lambda: self.client.update_task(task_id, **changes))
        if updated is not None:
            return self._store_task(updated)
        if "due_date" in changes:
            changes["due_date"] = to_naive_utc(changes["due_date"])
        return self._replace_task(
            task_id,
            lambda t: t.model_copy(update={**changes, "updated_at": touch(t.updated_at)}),
        )

    def toggle_task(self, task_id: int) -> Optional[TaskResponse]:
        current = self.get_task(task_id)
        if current is None:
            return None
        is_completed = not current.is_completed
        updated = self._remote(
            "toggle task",
            lambda: self.client.toggle_task_completion(task_id, is_completed),
        )
        if updated is not None:
            return self._store_task(updated)
        return self._replace_task(
            task_id,
            lambda t: t.model_copy(update={"is_completed": is_completed, "updated_at": touch(t.updated_at)}),
        )

    def delete_task(self, task_id: int) -> None:
        self._remote("delete task", lambda: self.client.delete_task(task_id))
        self.tasks = [t for t in self.tasks if t.id != task_id]

    # ---- in-memory views ----

    def get_task(self, task_id: int) -> Optional[TaskResponse]:
        return next((t for t in self.tasks if t.id == task_id), None)

    def member_name(self, member_id: Optional[int]) -> str:
        names: Dict[int, str] = {m.id: m.name for m in self.members}
        return names.get(member_id, "Unassigned")

    def category_name(self, category_id: Optional[int]) -> str:
        names: Dict[int, str] = {c.id: c.name for c in self.categories}
        return names.get(category_id, "No category")

    def filter_tasks(
        self,
        status: str = "all",
        assignee: Optional[int] = None,
        category: Optional[int] = None,
    ) -> List[TaskResponse]:
        if status not in STATUS_FILTERS:
            raise ValueError(f"status must be one of {STATUS_FILTERS}, got {status!r}")
        out = []
        for task in self.tasks:
            if status == "completed" and not task.is_completed:
                continue
            if status == "pending" and task.is_completed:
                continue
            if assignee is not None and task.assigned_to != assignee:
                continue
            if category is not None and task.category_id != category:
                continue
            out.append(task)
        return out

    def stats(self, now: Optional[datetime] = None) -> BoardStats:
        now = now or utcnow()
        completed = sum(1 for t in self.tasks if t.is_completed)
        overdue = sum(
            1 for t in self.tasks
            if not t.is_completed and t.due_date is not None and t.due_date < now
        )
        return BoardStats(
            total=len(self.tasks),
            completed=completed,
            pending=len(self.tasks) - completed,
            overdue=overdue,
        )
