from __future__ import annotations

import logging
import math
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from numbers import Real
from typing import Any

from ..models.month_context import MonthContext
from .calendar_rules import days_in_month, serial_to_datetime

"""Header analyzer: detect which month a planning sheet covers.

The header row (row 0) is scanned from the first day column (index 4) to the
right. Each cell is offered to an ordered list of matchers; the first cell
that any matcher accepts decides the month. Matchers are pure functions
returning a HeaderMatch or None.

Date generation is anchored to the caller supplied reference year. The year a
header carries is kept as ``MonthContext.detected_year`` only, unless the
caller explicitly asks to honor it.
"""

__all__ = [
    "HeaderParseError",
    "HeaderMatch",
    "MONTH_ABBREVIATIONS",
    "HEADER_MATCHERS",
    "FIRST_DAY_COLUMN",
    "normalize_month_token",
    "match_date_value",
    "match_serial_date",
    "match_day_dot_month",
    "match_day_month",
    "match_month_abbreviation",
    "match_header_cell",
    "analyze_header",
]

logger = logging.getLogger(__name__)

FIRST_DAY_COLUMN = 4

# German month abbreviations, with the common transliteration variants for
# März, Oktober and Dezember
MONTH_ABBREVIATIONS: dict[str, int] = {
    "Jan": 0,
    "Feb": 1,
    "Mär": 2,
    "Mar": 2,
    "Apr": 3,
    "Mai": 4,
    "Jun": 5,
    "Jul": 6,
    "Aug": 7,
    "Sep": 8,
    "Okt": 9,
    "Oct": 9,
    "Nov": 10,
    "Dez": 11,
    "Dec": 11,
}

_LETTERS = r"[^\W\d_]{3}"
_DAY_DOT_MONTH = re.compile(rf"(?<!\d)\d{{1,2}}\.({_LETTERS})")
_DAY_MONTH = re.compile(rf"(?<!\d)\d{{1,2}}({_LETTERS})")
_BARE_MONTH = re.compile(rf"({_LETTERS})\.?")


class HeaderParseError(Exception):
    """Raised when no month can be detected from the header row."""


@dataclass(frozen=True)
class HeaderMatch:
    """A matcher hit. ``year`` is None when the cell carries no year."""
    month_index: int
    year: int | None = None
    source: str = ""


HeaderMatcher = Callable[[Any], HeaderMatch | None]


def normalize_month_token(token: str) -> str:
    """First letter upper case, the rest lower case (``mÄR`` -> ``Mär``)."""
    return token[:1].upper() + token[1:].lower()


def _lookup_month(token: str, source: str) -> HeaderMatch | None:
    month_index = MONTH_ABBREVIATIONS.get(normalize_month_token(token))
    if month_index is None:
        return None
    return HeaderMatch(month_index=month_index, source=source)


def match_date_value(cell: Any) -> HeaderMatch | None:
    """Cells the decoder already turned into dates (pandas Timestamp included)."""
    if isinstance(cell, (datetime, date)):
        return HeaderMatch(month_index=cell.month - 1, year=cell.year, source="date")
    return None


def match_serial_date(cell: Any) -> HeaderMatch | None:
    """Numeric cells interpreted as spreadsheet date serials."""
    if isinstance(cell, bool) or not isinstance(cell, Real):
        return None
    if math.isnan(cell):
        return None
    try:
        converted = serial_to_datetime(cell)
    except (OverflowError, ValueError):
        return None
    return HeaderMatch(month_index=converted.month - 1, year=converted.year, source="serial")


def match_day_dot_month(cell: Any) -> HeaderMatch | None:
    """Text such as ``01.Aug``."""
    if not isinstance(cell, str):
        return None
    m = _DAY_DOT_MONTH.search(cell)
    return _lookup_month(m.group(1), "day.month") if m else None


def match_day_month(cell: Any) -> HeaderMatch | None:
    """Text such as ``1Aug``."""
    if not isinstance(cell, str):
        return None
    m = _DAY_MONTH.search(cell)
    return _lookup_month(m.group(1), "daymonth") if m else None


def match_month_abbreviation(cell: Any) -> HeaderMatch | None:
    """Text holding only a month abbreviation, e.g. ``AUG`` or ``Okt.``."""
    if not isinstance(cell, str):
        return None
    m = _BARE_MONTH.fullmatch(cell.strip())
    return _lookup_month(m.group(1), "month") if m else None


# Evaluated in order, first hit wins
HEADER_MATCHERS: tuple[HeaderMatcher, ...] = (
    match_date_value,
    match_serial_date,
    match_day_dot_month,
    match_day_month,
    match_month_abbreviation,
)


def match_header_cell(
    cell: Any, matchers: Sequence[HeaderMatcher] = HEADER_MATCHERS
) -> HeaderMatch | None:
    if cell is None:
        return None
    for matcher in matchers:
        result = matcher(cell)
        if result is not None:
            return result
    return None


def analyze_header(
    table: Sequence[Sequence[Any]],
    reference_year: int,
    *,
    honor_detected_year: bool = False,
    matchers: Sequence[HeaderMatcher] = HEADER_MATCHERS,
) -> MonthContext:
    """Resolve the MonthContext of a planning sheet.

    Args:
        table: Raw sheet rows; row 0 is the header
        reference_year: Year all dates are generated in (normally the current
            year, read by the caller)
        honor_detected_year: Use the year found in the header instead of
            ``reference_year``. Off by default, matching the established
            behaviour of the planning tool.
        matchers: Ordered matcher functions

    Raises:
        HeaderParseError: header row missing or no cell from column 4 onward
            yields a month
    """
    if not table or not table[0]:
        raise HeaderParseError("Could not detect month from header")
    header = table[0]
    for col in range(FIRST_DAY_COLUMN, len(header)):
        match = match_header_cell(header[col], matchers)
        if match is None:
            continue
        detected_year = match.year if match.year is not None else reference_year
        year = detected_year if honor_detected_year else reference_year
        logger.debug(
            f"header: month={match.month_index + 1} detected_year={detected_year} "
            f"year={year} col={col} via={match.source}"
        )
        if detected_year != year:
            logger.debug(f"header year {detected_year} ignored, dates use {year}")
        return MonthContext(
            month_index=match.month_index,
            year=year,
            days_in_month=days_in_month(year, match.month_index),
            detected_year=detected_year,
        )
    raise HeaderParseError("Could not detect month from header")
