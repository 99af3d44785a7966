"""Same-date-across-years logic - pure functions over in-memory entries."""

from dataclasses import dataclass
from datetime import date

from .date_value import DateValue
from .entry import DiaryEntry

DEFAULT_PAST_YEARS = 5


@dataclass
class DiaryPreview:
    """Summary of a past entry for list display."""

    id: str
    year: int
    preview: str
    character_count: int

    @classmethod
    def from_entry(cls, entry: DiaryEntry, max_length: int = 100) -> "DiaryPreview":
        return cls(
            id=entry.id,
            year=entry.year,
            preview=entry.preview_text(max_length),
            character_count=entry.character_count,
        )


def sort_by_date_desc(entries: list[DiaryEntry]) -> list[DiaryEntry]:
    """
    Sort entries newest first.

    Pure function - no I/O. Stable for entries sharing a date.
    """
    return sorted(entries, key=lambda e: e.date, reverse=True)


def entries_by_same_date(
    entries: list[DiaryEntry],
    target_date: date,
    years: int = DEFAULT_PAST_YEARS,
) -> list[DiaryEntry]:
    """
    Entries sharing target_date's month and day from the previous N years.

    An entry qualifies when its year is strictly before target_date's year and
    no earlier than target_date.year - years. Result is newest first.
    Pure function - no I/O.
    """
    target = DateValue.create(target_date)
    current_year = target.value.year
    min_year = current_year - years

    return sort_by_date_desc(
        [
            e
            for e in entries
            if DateValue(e.date).is_same_month_and_day(target)
            and min_year <= e.year < current_year
        ]
    )


def build_previews(entries: list[DiaryEntry], max_length: int = 100) -> list[DiaryPreview]:
    """Turn entries into previews, keeping their order."""
    return [DiaryPreview.from_entry(e, max_length) for e in entries]
