from datetime import datetime

import pytest
from pydantic import ValidationError

from family_tasks.schemas.category import CategoryUpdate
from family_tasks.schemas.common import DeleteInput, patch_fields
from family_tasks.schemas.family_member import FamilyMemberCreate, FamilyMemberUpdate
from family_tasks.schemas.task import TaskCompletionToggle, TaskCreate, TaskUpdate


def test_family_member_requires_name() -> None:
    with pytest.raises(ValidationError):
        FamilyMemberCreate(name="")
    with pytest.raises(ValidationError):
        FamilyMemberCreate(email="mom@family.com")


def test_family_member_email_and_avatar_syntax() -> None:
    with pytest.raises(ValidationError):
        FamilyMemberCreate(name="Mom", email="not-an-email")
    with pytest.raises(ValidationError):
        FamilyMemberCreate(name="Mom", avatar_url="not a url")

    member = FamilyMemberCreate(name="Mom", avatar_url="https://example.com/mom.png")
    assert member.avatar_url == "https://example.com/mom.png"


def test_patch_fields_distinguishes_absent_from_null() -> None:
    assert patch_fields(FamilyMemberUpdate(id=1)) == {}
    assert patch_fields(FamilyMemberUpdate(id=1, email=None)) == {"email": None}
    assert patch_fields(CategoryUpdate(id=3, color="#3b82f6")) == {"color": "#3b82f6"}
    assert patch_fields(TaskUpdate.model_validate({"id": 5, "description": None, "title": "X"})) == {
        "description": None,
        "title": "X",
    }


def test_required_fields_cannot_be_cleared() -> None:
    with pytest.raises(ValidationError):
        FamilyMemberUpdate(id=1, name=None)
    with pytest.raises(ValidationError):
        CategoryUpdate(id=1, name=None)
    with pytest.raises(ValidationError):
        TaskUpdate(id=1, title=None)
    with pytest.raises(ValidationError):
        TaskUpdate(id=1, is_completed=None)
    with pytest.raises(ValidationError):
        TaskUpdate(id=1, title="")


def test_task_due_date_parsing() -> None:
    task = TaskCreate.model_validate({"title": "Pay rent", "due_date": "2024-12-31T23:30:00-01:00"})
    assert task.due_date == datetime(2025, 1, 1, 0, 30)
    assert task.due_date.tzinfo is None

    with pytest.raises(ValidationError):
        TaskCreate.model_validate({"title": "Pay rent", "due_date": "someday"})


def test_toggle_requires_boolean() -> None:
    with pytest.raises(ValidationError):
        TaskCompletionToggle.model_validate({"id": 1})


def test_unknown_fields_rejected() -> None:
    with pytest.raises(ValidationError):
        TaskCreate.model_validate({"title": "Walk the dog", "priority": "high"})


def test_ids_must_fit_the_id_column() -> None:
    with pytest.raises(ValidationError):
        DeleteInput(id=2**31)
    with pytest.raises(ValidationError):
        DeleteInput(id=0)
    with pytest.raises(ValidationError):
        TaskCreate(title="Walk the dog", assigned_to=2**63)
    assert DeleteInput(id=2**31 - 1).id == 2**31 - 1


def test_email_keeps_original_spelling() -> None:
    assert FamilyMemberCreate(name="Mom", email="Mom@Family.COM").email == "Mom@Family.COM"
    with pytest.raises(ValidationError):
        FamilyMemberUpdate(id=1, email="mom@")
