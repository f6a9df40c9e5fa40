from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .common import EmailText, RowId, UrlStr, reject_null


class FamilyMemberCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: Optional[EmailText] = None
    avatar_url: Optional[UrlStr] = None

    class Config:
        extra = "forbid"


class FamilyMemberUpdate(BaseModel):
    id: RowId
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailText] = None
    avatar_url: Optional[UrlStr] = None

    @field_validator("name")
    @classmethod
    def name_not_null(cls, v):
        return reject_null(v)

    class Config:
        extra = "forbid"


class FamilyMemberResponse(BaseModel):
    id: int
    name: str
    email: Optional[str]
    avatar_url: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True
