"""Diary repository interface."""

from datetime import date
from typing import Protocol

from dialy.core.entry import DiaryEntry


class DiaryRepository(Protocol):
    """Interface for persisting diary entries in any backend.

    All operations are async so a backend may suspend on I/O.
    """

    async def save(self, entry: DiaryEntry) -> None:
        """Insert or replace an entry. Raises DuplicateDateEntryError if
        another entry already holds the same date."""
        ...

    async def find_by_id(self, entry_id: str) -> DiaryEntry | None:
        """Find an entry by id. Returns None if not found."""
        ...

    async def find_by_date(self, target_date: date) -> DiaryEntry | None:
        """Find the entry for a calendar date. Returns None if not found."""
        ...

    async def find_by_same_date(self, target_date: date, years: int = 5) -> list[DiaryEntry]:
        """Entries on the same month/day in the previous N years, newest first."""
        ...

    async def delete(self, entry_id: str) -> None:
        """Remove an entry by id. Unknown ids are ignored."""
        ...

    async def find_all(self) -> list[DiaryEntry]:
        """All entries, newest first."""
        ...
