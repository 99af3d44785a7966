"""Diary entry entity - pure domain logic, no I/O."""

import uuid
from dataclasses import dataclass, replace
from datetime import date, datetime, timezone

from dialy.errors import ContentTooLongError, FutureDateError, ValidationError

from .dates import is_future_date, is_same_date, start_of_day

MAX_CONTENT_LENGTH = 10_000


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DiaryEntry:
    """
    One diary record for exactly one calendar date.

    Instances are immutable. Every construction path, including
    reconstruction from storage, re-checks the invariants.
    """

    id: str
    date: date
    content: str
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        if not isinstance(self.id, str) or not self.id.strip():
            raise ValidationError("ID is required")
        if not isinstance(self.date, date):
            raise ValidationError("Invalid date")
        if not isinstance(self.created_at, datetime):
            raise ValidationError("Invalid createdAt")
        if not isinstance(self.updated_at, datetime):
            raise ValidationError("Invalid updatedAt")
        if not isinstance(self.content, str):
            raise ValidationError("Content must be a string")

        object.__setattr__(self, "date", start_of_day(self.date))
        # Naive timestamps are taken as local time
        for name in ("created_at", "updated_at"):
            value = getattr(self, name)
            if value.tzinfo is None:
                object.__setattr__(self, name, value.astimezone())

        if is_future_date(self.date):
            raise FutureDateError()
        if len(self.content) > MAX_CONTENT_LENGTH:
            raise ContentTooLongError()

    @classmethod
    def create(
        cls, entry_date: date | datetime, content: str, now: datetime | None = None
    ) -> "DiaryEntry":
        """Create a new entry with a fresh id and both timestamps set to now."""
        now = now or utc_now()
        return cls(
            id=str(uuid.uuid4()),
            date=entry_date,
            content=content,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def reconstruct(
        cls,
        id: str,
        date: date | datetime,
        content: str,
        created_at: datetime,
        updated_at: datetime,
    ) -> "DiaryEntry":
        """Restore a stored entry, re-validating every field."""
        return cls(
            id=id,
            date=date,
            content=content,
            created_at=created_at,
            updated_at=updated_at,
        )

    def update(self, new_content: str, now: datetime | None = None) -> "DiaryEntry":
        """Return a copy with new content and a refreshed updated_at."""
        return replace(self, content=new_content, updated_at=now or utc_now())

    def is_same_date(self, other: date | datetime) -> bool:
        return is_same_date(self.date, other)

    @property
    def year(self) -> int:
        return self.date.year

    @property
    def character_count(self) -> int:
        return len(self.content)

    def preview_text(self, max_length: int = 100) -> str:
        """Content cut to max_length characters, with '...' when truncated."""
        if len(self.content) <= max_length:
            return self.content
        return f"{self.content[:max_length]}..."
