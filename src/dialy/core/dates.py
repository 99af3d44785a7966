"""Pure calendar-date helpers - no I/O dependencies.

All comparisons work on local calendar dates; time of day is ignored.
"""

import re
from datetime import date, datetime, timedelta

from dialy.errors import ValidationError

WEEKDAYS_JA = ["月", "火", "水", "木", "金", "土", "日"]

_ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def start_of_day(value: date | datetime) -> date:
    """Reduce a date or datetime to its local calendar date."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    return value


def is_same_date(left: date | datetime, right: date | datetime) -> bool:
    """Check if two values fall on the same calendar date."""
    return start_of_day(left) == start_of_day(right)


def is_future_date(value: date | datetime, today: date | None = None) -> bool:
    """True if the value's calendar date is after today."""
    today = today or date.today()
    return start_of_day(value) > today


def add_days(value: date, days: int) -> date:
    return value + timedelta(days=days)


def to_iso_date(value: date | datetime) -> str:
    """Format as YYYY-MM-DD."""
    return start_of_day(value).isoformat()


def parse_iso_date(value: str) -> date:
    """
    Parse a YYYY-MM-DD string as a local calendar date.

    Raises ValidationError for anything else, including impossible dates
    such as 2025-02-30.
    """
    match = _ISO_DATE_RE.match(value)
    if not match:
        raise ValidationError(f"Invalid ISO date format: {value!r}")
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as e:
        raise ValidationError(f"Invalid ISO date: {value!r}", cause=e)


def format_date_with_weekday(value: date | datetime) -> str:
    """Format as month, day and weekday, e.g. 2月8日（日）."""
    value = start_of_day(value)
    weekday = WEEKDAYS_JA[value.weekday()]
    return f"{value.month}月{value.day}日（{weekday}）"
