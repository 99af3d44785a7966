"""Calendar date value object."""

import calendar
from dataclasses import dataclass
from datetime import MINYEAR, date, datetime

from dialy.errors import ValidationError

from .dates import format_date_with_weekday, start_of_day, to_iso_date


@dataclass(frozen=True)
class DateValue:
    """A single calendar date, compared by month/day across years."""

    value: date

    def __post_init__(self):
        if not isinstance(self.value, date):
            raise ValidationError("Invalid date")
        # datetime is a date subclass; keep only the calendar date
        object.__setattr__(self, "value", start_of_day(self.value))

    @classmethod
    def create(cls, value: date | datetime) -> "DateValue":
        """Create from a date or datetime. Raises ValidationError otherwise."""
        return cls(value)

    @classmethod
    def today(cls) -> "DateValue":
        return cls(date.today())

    def is_same_month_and_day(self, other: "DateValue") -> bool:
        """Month and day match; year is ignored."""
        return self.value.month == other.value.month and self.value.day == other.value.day

    def same_dates_in_past_years(self, years: int) -> list["DateValue"]:
        """
        Same month/day for each of the last N years, most recent first.

        Feb 29 projected onto a non-leap year becomes Feb 28. Stops at year 1.
        """
        dates = []
        for offset in range(1, years + 1):
            year = self.value.year - offset
            if year < MINYEAR:
                break
            day = self.value.day
            if self.value.month == 2 and day == 29 and not calendar.isleap(year):
                day = 28
            dates.append(DateValue(self.value.replace(year=year, day=day)))
        return dates

    def format_with_weekday(self) -> str:
        return format_date_with_weekday(self.value)

    def format_iso(self) -> str:
        return to_iso_date(self.value)

    def to_date(self) -> date:
        return self.value
