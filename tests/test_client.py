import json
from datetime import datetime, timezone

import httpx
import pytest

from family_tasks.client.board import TaskBoard
from family_tasks.client.rpc_client import (
    BackendUnavailable,
    FamilyTasksClient,
    RemoteNotFoundError,
    RemoteValidationError,
)

TASK = {
    "id": 7,
    "title": "Clean kitchen",
    "description": None,
    "due_date": None,
    "is_completed": False,
    "assigned_to": 1,
    "category_id": None,
    "created_at": "2024-12-20T08:00:00",
    "updated_at": "2024-12-20T08:00:00",
}


def make_client(handler) -> FamilyTasksClient:
    return FamilyTasksClient("http://api.test", transport=httpx.MockTransport(handler))


def unreachable(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


def test_client_sends_only_given_update_fields() -> None:
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, request.url.path, json.loads(request.content)))
        return httpx.Response(200, json={"result": {**TASK, "description": None}})

    with make_client(handler) as client:
        task = client.update_task(7, description=None)

    assert seen == [("POST", "/rpc/updateTask", {"id": 7, "description": None})]
    assert task.id == 7
    assert task.created_at == datetime(2024, 12, 20, 8, 0)


def test_client_queries_use_get() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        assert request.url.path == "/rpc/getTasks"
        return httpx.Response(200, json={"result": [TASK]})

    with make_client(handler) as client:
        assert [t.title for t in client.get_tasks()] == ["Clean kitchen"]


def test_client_maps_error_codes() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("updateTask"):
            body = {"error": {"code": "NOT_FOUND", "message": "Task with id 9 not found", "details": []}}
            return httpx.Response(404, json=body)
        body = {"error": {"code": "VALIDATION_ERROR", "message": "Invalid input", "details": []}}
        return httpx.Response(422, json=body)

    with make_client(handler) as client:
        with pytest.raises(RemoteNotFoundError) as exc:
            client.update_task(9, title="X")
        assert exc.value.status_code == 404
        with pytest.raises(RemoteValidationError):
            client.create_family_member("")


def test_client_transport_failure() -> None:
    with make_client(unreachable) as client:
        with pytest.raises(BackendUnavailable):
            client.healthcheck()


def test_board_falls_back_to_demo_data() -> None:
    board = TaskBoard(make_client(unreachable))
    board.load()

    assert board.demo_mode is True
    assert [m.name for m in board.members] == ["Mom", "Dad", "Alice", "Bob"]
    assert [c.name for c in board.categories] == ["Chores", "Shopping", "School", "Personal"]
    assert len(board.tasks) == 5


def test_demo_mode_mutations_stay_local() -> None:
    board = TaskBoard(make_client(unreachable))
    board.load()

    task = board.add_task("Water plants", assigned_to=3, category_id=4)
    assert task.id == 6
    assert task.updated_at == task.created_at

    toggled = board.toggle_task(task.id)
    assert toggled.is_completed is True
    assert toggled.updated_at > task.updated_at

    board.delete_member(1)
    assert all(t.assigned_to != 1 for t in board.tasks)
    assert board.get_task(1).assigned_to is None
    assert board.member_name(None) == "Unassigned"

    board.delete_category(4)
    assert board.get_task(task.id).category_id is None

    board.delete_task(2)
    assert board.get_task(2) is None


def test_board_filters_and_stats() -> None:
    board = TaskBoard(make_client(unreachable))
    board.load_demo_data()

    assert [t.id for t in board.filter_tasks(status="completed")] == [2]
    assert [t.id for t in board.filter_tasks(status="pending", assignee=1)] == [1, 5]
    assert [t.id for t in board.filter_tasks(category=3)] == [3]
    with pytest.raises(ValueError):
        board.filter_tasks(status="someday")

    stats = board.stats(now=datetime(2024, 12, 23))
    assert (stats.total, stats.completed, stats.pending, stats.overdue) == (5, 1, 4, 2)


def test_board_online_uses_server_results() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        op = request.url.path.rsplit("/", 1)[-1]
        if op == "getTasks":
            return httpx.Response(200, json={"result": [TASK]})
        if op in ("getFamilyMembers", "getCategories"):
            return httpx.Response(200, json={"result": []})
        if op == "toggleTaskCompletion":
            payload = json.loads(request.content)
            assert payload == {"id": 7, "is_completed": True}
            return httpx.Response(
                200,
                json={"result": {**TASK, "is_completed": True, "updated_at": "2024-12-21T09:00:00"}},
            )
        raise AssertionError(f"unexpected call {op}")

    board = TaskBoard(make_client(handler))
    board.load()
    assert board.demo_mode is False

    toggled = board.toggle_task(7)
    assert toggled.is_completed is True
    assert toggled.updated_at == datetime(2024, 12, 21, 9, 0)


def test_board_applies_locally_when_a_call_fails() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        op = request.url.path.rsplit("/", 1)[-1]
        if op == "getTasks":
            return httpx.Response(200, json={"result": [TASK]})
        if op in ("getFamilyMembers", "getCategories"):
            return httpx.Response(200, json={"result": []})
        return httpx.Response(503, json={"error": {"code": "STORE_ERROR", "message": "down"}})

    board = TaskBoard(make_client(handler))
    board.load()

    board.delete_task(7)
    assert board.tasks == []
    assert board.demo_mode is False


def test_demo_mode_due_dates_are_stored_as_utc() -> None:
    board = TaskBoard(make_client(unreachable))
    board.load_demo_data()

    dentist = board.add_task("Dentist", due_date=datetime(2024, 6, 1, 12, tzinfo=timezone.utc))
    assert dentist.due_date == datetime(2024, 6, 1, 12)

    moved = board.update_task(1, due_date=datetime(2024, 12, 20, 9, tzinfo=timezone.utc))
    assert moved.due_date == datetime(2024, 12, 20, 9)

    stats = board.stats(now=datetime(2024, 12, 23))
    assert stats.total == 6
    assert stats.overdue == 4


def test_board_keeps_server_result_for_unloaded_task() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        assert request.url.path == "/rpc/updateTask"
        assert payload == {"id": 7, "title": "Clean kitchen and oven"}
        return httpx.Response(200, json={"result": {**TASK, "title": "Clean kitchen and oven"}})

    board = TaskBoard(make_client(handler))
    updated = board.update_task(7, title="Clean kitchen and oven")

    assert updated.title == "Clean kitchen and oven"
    assert board.get_task(7) == updated
    assert len(board.tasks) == 1
