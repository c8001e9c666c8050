from __future__ import annotations

from dataclasses import dataclass

"""MonthContext model for the promotion planner.

Resolved once per sheet by the header analyzer and passed to the schedule
extractor. ``year`` drives day counting and date formatting, while
``detected_year`` records what the header itself carried.
"""

__all__ = [
    "MonthContext",
]


@dataclass(frozen=True)
class MonthContext:
    """Calendar month covered by one planning sheet.

    Attributes:
        month_index: 0-based month (0 = January, 11 = December)
        year: Year used for date generation
        days_in_month: Number of days in (year, month); bounds the day columns
        detected_year: Year read from the header (informational only)
    """
    month_index: int
    year: int
    days_in_month: int
    detected_year: int

    @property
    def month(self) -> int:
        """1-based calendar month."""
        return self.month_index + 1

    @property
    def last_day_column(self) -> int:
        """Exclusive upper bound of the day column range."""
        return 4 + self.days_in_month
