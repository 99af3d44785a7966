"""Use-case layer between callers (CLI, UI) and the diary repository.

Each use case validates its input, talks to the repository, and turns
storage failures into SaveFailedError / FetchFailedError. Validation errors,
including those raised by the repository itself, pass through unchanged.
"""

import logging
from contextlib import contextmanager
from datetime import date, datetime

from .core.diary import DEFAULT_PAST_YEARS
from .core.entry import DiaryEntry
from .errors import (
    AppError,
    DuplicateDateEntryError,
    FetchFailedError,
    SaveFailedError,
    ValidationError,
)
from .ports.diary_repo import DiaryRepository
from .validation import (
    CreateDiaryEntryInput,
    DeleteDiaryEntryInput,
    DiaryDateInput,
    SameDateQueryInput,
    UpdateDiaryEntryInput,
    parse_input,
)

logger = logging.getLogger(__name__)


@contextmanager
def storage_errors(error_cls: type[AppError], message: str):
    """Re-raise repository failures as error_cls, keeping the cause."""
    try:
        yield
    except ValidationError:
        raise
    except Exception as e:
        raise error_cls(message, cause=e) from e


class CreateDiaryEntry:
    """Write the entry for a date that has none yet."""

    def __init__(self, repository: DiaryRepository):
        self.repository = repository

    async def execute(self, entry_date: date | datetime, content: str) -> DiaryEntry:
        validated = parse_input(CreateDiaryEntryInput, {"date": entry_date, "content": content})

        with storage_errors(FetchFailedError, "Failed to load diary entry"):
            existing = await self.repository.find_by_date(validated.date)
        if existing is not None:
            raise DuplicateDateEntryError()

        entry = DiaryEntry.create(validated.date, validated.content)
        with storage_errors(SaveFailedError, "Failed to save diary entry"):
            await self.repository.save(entry)

        logger.info(f"Created entry {entry.id} for {entry.date.isoformat()}")
        return entry


class UpdateDiaryEntry:
    """Replace the content of an existing entry."""

    def __init__(self, repository: DiaryRepository):
        self.repository = repository

    async def execute(self, entry_id: str, content: str) -> DiaryEntry:
        validated = parse_input(UpdateDiaryEntryInput, {"id": entry_id, "content": content})

        with storage_errors(FetchFailedError, "Failed to load diary entry"):
            existing = await self.repository.find_by_id(validated.id)
        if existing is None:
            raise FetchFailedError("Diary entry not found")

        updated = existing.update(validated.content)
        with storage_errors(SaveFailedError, "Failed to save diary entry"):
            await self.repository.save(updated)

        logger.info(f"Updated entry {updated.id}")
        return updated


class DeleteDiaryEntry:
    def __init__(self, repository: DiaryRepository):
        self.repository = repository

    async def execute(self, entry_id: str) -> None:
        validated = parse_input(DeleteDiaryEntryInput, {"id": entry_id})

        with storage_errors(SaveFailedError, "Failed to delete diary entry"):
            await self.repository.delete(validated.id)

        logger.info(f"Deleted entry {validated.id}")


class GetDiaryEntry:
    def __init__(self, repository: DiaryRepository):
        self.repository = repository

    async def execute(self, entry_date: date | datetime) -> DiaryEntry | None:
        """Entry for the date, or None if nothing was written that day."""
        validated = parse_input(DiaryDateInput, {"date": entry_date})

        with storage_errors(FetchFailedError, "Failed to load diary entry"):
            return await self.repository.find_by_date(validated.date)


class GetEntriesBySameDate:
    """Entries from the same month/day in previous years, newest first."""

    def __init__(self, repository: DiaryRepository):
        self.repository = repository

    async def execute(
        self, entry_date: date | datetime, years: int | None = DEFAULT_PAST_YEARS
    ) -> list[DiaryEntry]:
        data = {"date": entry_date}
        if years is not None:
            data["years"] = years
        validated = parse_input(SameDateQueryInput, data)

        with storage_errors(FetchFailedError, "Failed to load diary entries"):
            return await self.repository.find_by_same_date(validated.date, validated.years)
