"""Functional core - pure business logic with no I/O."""

from .date_value import DateValue
from .dates import format_date_with_weekday, is_future_date, parse_iso_date, to_iso_date
from .diary import DiaryPreview, build_previews, entries_by_same_date, sort_by_date_desc
from .entry import MAX_CONTENT_LENGTH, DiaryEntry

__all__ = [
    # Dates
    "DateValue",
    "format_date_with_weekday",
    "is_future_date",
    "parse_iso_date",
    "to_iso_date",
    # Entries
    "DiaryEntry",
    "MAX_CONTENT_LENGTH",
    # Same-date lookups
    "DiaryPreview",
    "build_previews",
    "entries_by_same_date",
    "sort_by_date_desc",
]
