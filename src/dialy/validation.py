"""Input schemas for the diary use cases.

Each schema validates one use-case input. ``parse_input`` turns pydantic's
errors into the application's typed errors: a future date becomes
FutureDateError, over-long content becomes ContentTooLongError, and anything
else becomes a plain ValidationError.
"""

import datetime as dt
import re
from typing import Annotated, Any, TypeVar

from pydantic import AfterValidator, BaseModel, BeforeValidator, Field
from pydantic import ValidationError as SchemaError
from pydantic_core import PydanticCustomError

from .core.dates import is_future_date, start_of_day
from .core.diary import DEFAULT_PAST_YEARS
from .core.entry import MAX_CONTENT_LENGTH
from .errors import ContentTooLongError, FutureDateError, ValidationError

MAX_PAST_YEARS = 50

UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def _calendar_date(value: Any) -> Any:
    if isinstance(value, dt.datetime):
        return start_of_day(value)
    return value


def _not_future(value: dt.date) -> dt.date:
    if is_future_date(value):
        raise PydanticCustomError("future_date", "Future date is not allowed")
    return value


def _uuid_shape(value: str) -> str:
    if not UUID_RE.match(value):
        raise PydanticCustomError("invalid_id", "Invalid ID format")
    return value


PastOrTodayDate = Annotated[dt.date, BeforeValidator(_calendar_date), AfterValidator(_not_future)]
EntryId = Annotated[str, AfterValidator(_uuid_shape)]
EntryContent = Annotated[str, Field(max_length=MAX_CONTENT_LENGTH)]


class DiaryDateInput(BaseModel):
    """A calendar date that is not in the future."""

    date: PastOrTodayDate


class CreateDiaryEntryInput(DiaryDateInput):
    content: EntryContent


class UpdateDiaryEntryInput(BaseModel):
    id: EntryId
    content: EntryContent


class DeleteDiaryEntryInput(BaseModel):
    id: EntryId


class SameDateQueryInput(DiaryDateInput):
    years: int = Field(default=DEFAULT_PAST_YEARS, ge=1, le=MAX_PAST_YEARS, strict=True)


def parse_input(schema: type[SchemaT], data: dict[str, Any]) -> SchemaT:
    """Validate data against schema, raising the matching AppError on failure."""
    try:
        return schema.model_validate(data)
    except SchemaError as e:
        errors = e.errors()
        if any(err["type"] == "future_date" for err in errors):
            raise FutureDateError(cause=e)
        if any(err["type"] == "string_too_long" and "content" in err["loc"] for err in errors):
            raise ContentTooLongError(cause=e)

        first = errors[0]
        field = ".".join(str(part) for part in first["loc"])
        message = f"{field}: {first['msg']}" if field else first["msg"]
        raise ValidationError(message, cause=e)
