from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .common import RowId, UtcDatetime, reject_null


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    due_date: Optional[UtcDatetime] = None
    assigned_to: Optional[RowId] = None  # Can be null for unassigned tasks
    category_id: Optional[RowId] = None

    class Config:
        extra = "forbid"


class TaskUpdate(BaseModel):
    id: RowId
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    due_date: Optional[UtcDatetime] = None
    is_completed: Optional[bool] = None
    assigned_to: Optional[RowId] = None
    category_id: Optional[RowId] = None

    @field_validator("title", "is_completed")
    @classmethod
    def not_clearable(cls, v):
        return reject_null(v)

    class Config:
        extra = "forbid"


class TaskCompletionToggle(BaseModel):
    id: RowId
    is_completed: bool

    class Config:
        extra = "forbid"


class TaskResponse(BaseModel):
    id: int
    title: str
    description: Optional[str]
    due_date: Optional[datetime]
    is_completed: bool
    assigned_to: Optional[int]
    category_id: Optional[int]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
