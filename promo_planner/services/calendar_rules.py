from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta

"""Calendar and working-hour helpers used by the header analyzer and extractor.

All functions are pure; none of them read the system clock.
"""

__all__ = [
    "WEEKDAY_NAMES",
    "WEEKEND_DAYS",
    "SERIAL_EPOCH",
    "WorkingHours",
    "day_of_week",
    "working_hours",
    "days_in_month",
    "serial_to_datetime",
    "format_date",
]

# Indexed by date.weekday() (Monday = 0)
WEEKDAY_NAMES: tuple[str, ...] = ("Mo", "Di", "Mi", "Do", "Fr", "Sa", "So")
WEEKEND_DAYS = frozenset({"Sa", "So"})

# Spreadsheet day 0 (Excel's 1900 leap-year bug is already folded in)
SERIAL_EPOCH = datetime(1899, 12, 30)


@dataclass(frozen=True)
class WorkingHours:
    start: str
    end: str


WEEKEND_HOURS = WorkingHours(start="09:00", end="18:00")
WEEKDAY_HOURS = WorkingHours(start="09:30", end="18:30")


def day_of_week(value: date) -> str:
    """German two-letter weekday name for ``value``."""
    return WEEKDAY_NAMES[value.weekday()]


def working_hours(weekday: str) -> WorkingHours:
    if weekday in WEEKEND_DAYS:
        return WEEKEND_HOURS
    return WEEKDAY_HOURS


def days_in_month(year: int, month_index: int) -> int:
    """Number of days in a month given its 0-based index."""
    return calendar.monthrange(year, month_index + 1)[1]


def serial_to_datetime(serial: float) -> datetime:
    """Convert a spreadsheet date serial (fractional days) to a datetime.

    Raises:
        OverflowError: serial lies outside the datetime range
    """
    return SERIAL_EPOCH + timedelta(days=float(serial))


def format_date(day: int, month_index: int, year: int) -> str:
    """Format as zero-padded ``DD.MM.YYYY``."""
    return f"{day:02d}.{month_index + 1:02d}.{year:04d}"
