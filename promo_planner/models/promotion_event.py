from __future__ import annotations

from dataclasses import astuple, dataclass
from typing import Any

"""PromotionEvent output record.

One record per promoter per day. Created only by the schedule extractor and
consumed read-only by the preview and the workbook writer.
"""

__all__ = [
    "PromotionEvent",
    "EXPORT_HEADERS",
    "PREVIEW_HEADERS",
]

# Column labels of the exported workbook, in field order
EXPORT_HEADERS: tuple[str, ...] = (
    "Tag der Woche",
    "Datum",
    "Startzeit",
    "Endzeit",
    "Gesamtstunden",
    "Point of Sales",
    "Bezirk",
    "Marktname",
    "Coffee Advisor",
)

PREVIEW_HEADERS: tuple[str, ...] = (
    "Tag",
    "Datum",
    "Start",
    "Ende",
    "Stunden",
    "Point of Sales",
    "Bezirk",
    "Marktname",
    "Coffee Advisor",
)


@dataclass(frozen=True, eq=False)
class PromotionEvent:
    """Normalized promotion day for a single sales location.

    Split cells produce two records with identical field values, so equality
    is identity-based; compare with ``as_row()`` when field values matter.
    """
    day_of_week: str  # Mo..So
    date: str  # DD.MM.YYYY
    start_time: str  # HH:MM
    end_time: str  # HH:MM
    total_hours: int
    point_of_sales: str  # location exactly as in the sheet
    district: str
    market_name: str  # location without the site prefix
    coffee_advisor: str = ""  # filled in manually after export

    def as_row(self) -> tuple[Any, ...]:
        """Field values in export column order."""
        return astuple(self)
