import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import httpx
from pydantic import TypeAdapter

from family_tasks.schemas.category import CategoryResponse
from family_tasks.schemas.common import HealthStatus
from family_tasks.schemas.family_member import FamilyMemberResponse
from family_tasks.schemas.task import TaskResponse

logger = logging.getLogger(__name__)

_members = TypeAdapter(List[FamilyMemberResponse])
_categories = TypeAdapter(List[CategoryResponse])
_tasks = TypeAdapter(List[TaskResponse])

# Marks "leave this field unchanged" in update calls; None means "clear it".
UNSET: Any = object()


class ClientError(Exception):
    pass


class BackendUnavailable(ClientError):
    """The API could not be reached at all (connection refused, timeout, ...)."""


class RemoteError(ClientError):
    def __init__(self, code: str, message: str, status_code: int, details=None):
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or []


class RemoteValidationError(RemoteError):
    pass


class RemoteNotFoundError(RemoteError):
    pass


class RemoteStoreError(RemoteError):
    pass


_ERRORS_BY_CODE = {
    "VALIDATION_ERROR": RemoteValidationError,
    "NOT_FOUND": RemoteNotFoundError,
    "STORE_ERROR": RemoteStoreError,
}


def _patch(**fields) -> Dict[str, Any]:
    return {name: value for name, value in fields.items() if value is not UNSET}


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


class FamilyTasksClient:
    """Synchronous client for the /rpc endpoint."""

    def __init__(
        self,
        base_url: str = "http://localhost:2022",
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._http = httpx.Client(
            base_url=base_url.rstrip("/") + "/rpc", timeout=timeout, transport=transport
        )

    def close(self):
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _call(self, operation: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        try:
            if payload is None:
                resp = self._http.get(f"/{operation}")
            else:
                resp = self._http.post(f"/{operation}", json=payload)
        except httpx.TransportError as e:
            raise BackendUnavailable(f"{operation}: {e}") from e

        try:
            data = resp.json()
        except ValueError:
            data = None

        if isinstance(data, dict) and "error" in data:
            err = data["error"]
            cls = _ERRORS_BY_CODE.get(err.get("code"), RemoteError)
            raise cls(err.get("code", "UNKNOWN"), err.get("message", ""), resp.status_code, err.get("details"))
        if resp.is_error or not isinstance(data, dict):
            # Not our API answering (proxy page, gateway error...)
            raise BackendUnavailable(f"{operation}: HTTP {resp.status_code}")
        return data["result"]

    # ---- system ----

    def healthcheck(self) -> HealthStatus:
        return HealthStatus.model_validate(self._call("healthcheck"))

    # ---- family members ----

    def create_family_member(self, name: str, email: Optional[str] = None, avatar_url: Optional[str] = None):
        result = self._call("createFamilyMember", {"name": name, "email": email, "avatar_url": avatar_url})
        return FamilyMemberResponse.model_validate(result)

    def get_family_members(self) -> List[FamilyMemberResponse]:
        return _members.validate_python(self._call("getFamilyMembers"))

    def update_family_member(self, member_id: int, name=UNSET, email=UNSET, avatar_url=UNSET):
        payload = {"id": member_id, **_patch(name=name, email=email, avatar_url=avatar_url)}
        return FamilyMemberResponse.model_validate(self._call("updateFamilyMember", payload))

    def delete_family_member(self, member_id: int) -> bool:
        return self._call("deleteFamilyMember", {"id": member_id})["success"]

    # ---- categories ----

    def create_category(self, name: str, description: Optional[str] = None, color: Optional[str] = None):
        result = self._call("createCategory", {"name": name, "description": description, "color": color})
        return CategoryResponse.model_validate(result)

    def get_categories(self) -> List[CategoryResponse]:
        return _categories.validate_python(self._call("getCategories"))

    def update_category(self, category_id: int, name=UNSET, description=UNSET, color=UNSET):
        payload = {"id": category_id, **_patch(name=name, description=description, color=color)}
        return CategoryResponse.model_validate(self._call("updateCategory", payload))

    def delete_category(self, category_id: int) -> bool:
        return self._call("deleteCategory", {"id": category_id})["success"]

    # ---- tasks ----

    def create_task(
        self,
        title: str,
        description: Optional[str] = None,
        due_date: Optional[datetime] = None,
        assigned_to: Optional[int] = None,
        category_id: Optional[int] = None,
    ) -> TaskResponse:
        payload = {
            "title": title,
            "description": description,
            "due_date": _iso(due_date),
            "assigned_to": assigned_to,
            "category_id": category_id,
        }
        return TaskResponse.model_validate(self._call("createTask", payload))

    def get_tasks(self) -> List[TaskResponse]:
        return _tasks.validate_python(self._call("getTasks"))

    def update_task(
        self,
        task_id: int,
        title=UNSET,
        description=UNSET,
        due_date=UNSET,
        is_completed=UNSET,
        assigned_to=UNSET,
        category_id=UNSET,
    ) -> TaskResponse:
        if isinstance(due_date, datetime):
            due_date = _iso(due_date)
        payload = {
            "id": task_id,
            **_patch(
                title=title,
                description=description,
                due_date=due_date,
                is_completed=is_completed,
                assigned_to=assigned_to,
                category_id=category_id,
            ),
        }
        return TaskResponse.model_validate(self._call("updateTask", payload))

    def delete_task(self, task_id: int) -> bool:
        return self._call("deleteTask", {"id": task_id})["success"]

    def toggle_task_completion(self, task_id: int, is_completed: bool) -> TaskResponse:
        result = self._call("toggleTaskCompletion", {"id": task_id, "is_completed": is_completed})
        return TaskResponse.model_validate(result)
