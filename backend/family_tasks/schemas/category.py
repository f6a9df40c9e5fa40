from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .common import RowId, reject_null


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    color: Optional[str] = None  # hex color code, not validated

    class Config:
        extra = "forbid"


class CategoryUpdate(BaseModel):
    id: RowId
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    color: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_null(cls, v):
        return reject_null(v)

    class Config:
        extra = "forbid"


class CategoryResponse(BaseModel):
    id: int
    name: str
    description: Optional[str]
    color: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True
