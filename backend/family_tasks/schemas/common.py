from datetime import datetime
from typing import Annotated, Any, Dict

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, AnyUrl, BaseModel, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from family_tasks.core.timestamps import to_naive_utc

_url_adapter = TypeAdapter(AnyUrl)


def check_url(value: str) -> str:
    # Validate the syntax only; the caller's spelling is what gets stored.
    try:
        _url_adapter.validate_python(value)
    except PydanticValidationError:
        raise ValueError("must be a valid URL")
    return value


UrlStr = Annotated[str, AfterValidator(check_url)]


def check_email(value: str) -> str:
    # Same as URLs: syntax only, stored as sent.
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        raise ValueError("must be a valid email address")
    return value


EmailText = Annotated[str, AfterValidator(check_email)]

# Ids fit a 32-bit integer column (Postgres int4, SQLite INTEGER).
RowId = Annotated[int, Field(ge=1, le=2**31 - 1)]

# Wire dates arrive as ISO-8601, possibly with an offset; columns hold naive UTC.
UtcDatetime = Annotated[datetime, AfterValidator(to_naive_utc)]


def reject_null(value: Any) -> Any:
    if value is None:
        raise ValueError("field cannot be null")
    return value


def patch_fields(payload: BaseModel) -> Dict[str, Any]:
    """
    Fields the caller actually sent, minus the target id.

    An omitted field is absent from the result (leave unchanged) while an
    explicit null is present with value None (clear the field).
    """
    return payload.model_dump(exclude_unset=True, exclude={"id"})


class DeleteInput(BaseModel):
    id: RowId

    class Config:
        extra = "forbid"


class SuccessResponse(BaseModel):
    success: bool


class HealthStatus(BaseModel):
    status: str
    timestamp: datetime
