from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping, Sequence
from datetime import date
from functools import lru_cache
from numbers import Real
from typing import Any

import numpy as np

from ..models.month_context import MonthContext
from ..models.promotion_event import PromotionEvent
from ..models.quantity_rule import DEFAULT_QUANTITY_RULE, QUANTITY_RULES, QuantityRule
from .calendar_rules import day_of_week, format_date, working_hours
from .header_analyzer import FIRST_DAY_COLUMN, HeaderMatcher, HEADER_MATCHERS, analyze_header

"""Schedule extractor: turn planning cells into PromotionEvent records.

Layout of a planning sheet:
- row 0: header (month detection only)
- column 0: location, column 1: district, columns 2-3: unused
- column 4 + n: day n + 1 of the month

Malformed rows and cells are skipped, never reported. Output order is
row-major, left to right, with split duplicates adjacent.
"""

__all__ = [
    "MIN_ROW_LENGTH",
    "DEFAULT_MARKET_PREFIX",
    "is_empty_cell",
    "resolve_quantity_rule",
    "clean_market_name",
    "extract_events",
    "extract_schedule",
]

logger = logging.getLogger(__name__)

MIN_ROW_LENGTH = 5
DEFAULT_MARKET_PREFIX = "MM"


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def is_empty_cell(value: Any) -> bool:
    """True for cells that carry no planning entry (blank, NaN, 0 or FALSE)."""
    if value is None:
        return True
    if isinstance(value, (bool, np.bool_)):
        return not value
    if isinstance(value, str):
        return value.strip() == ""
    if _is_number(value):
        return math.isnan(value) or value == 0
    return False


def resolve_quantity_rule(
    value: Any, rules: Mapping[float, QuantityRule] = QUANTITY_RULES
) -> QuantityRule:
    """Look up the rule for a non-empty cell value; text cells use the default."""
    if _is_number(value):
        return rules.get(value, DEFAULT_QUANTITY_RULE)
    return DEFAULT_QUANTITY_RULE


@lru_cache(maxsize=16)
def _prefix_pattern(prefix: str) -> re.Pattern[str]:
    # repeated tags ("MM MM North") are stripped too, so cleaning is idempotent
    return re.compile(rf"^(?:{re.escape(prefix)}\s+)+")


def clean_market_name(location: str, prefix: str = DEFAULT_MARKET_PREFIX) -> str:
    """Strip the leading site tag (``MM North`` -> ``North``).

    Case-sensitive; the tag must be followed by whitespace. Applying it to an
    already cleaned name is a no-op.
    """
    if not prefix:
        return location
    return _prefix_pattern(prefix).sub("", location, count=1)


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value)


def extract_events(
    table: Sequence[Sequence[Any]],
    context: MonthContext,
    *,
    market_prefix: str = DEFAULT_MARKET_PREFIX,
    quantity_rules: Mapping[float, QuantityRule] = QUANTITY_RULES,
) -> list[PromotionEvent]:
    """Walk the data rows and emit one or more events per populated day cell."""
    events: list[PromotionEvent] = []
    skipped_rows = 0
    for row_index in range(1, len(table)):
        row = table[row_index]
        if row is None or len(row) < MIN_ROW_LENGTH:
            skipped_rows += 1
            continue

        location = _cell_text(row[0])
        district = _cell_text(row[1])
        market_name = clean_market_name(location, market_prefix)

        end_col = min(len(row), context.last_day_column)
        for col in range(FIRST_DAY_COLUMN, end_col):
            value = row[col]
            if is_empty_cell(value):
                continue

            day = col - 3
            weekday = day_of_week(date(context.year, context.month, day))
            hours = working_hours(weekday)
            rule = resolve_quantity_rule(value, quantity_rules)
            formatted = format_date(day, context.month_index, context.year)

            for _ in range(rule.event_count):
                events.append(
                    PromotionEvent(
                        day_of_week=weekday,
                        date=formatted,
                        start_time=hours.start,
                        end_time=hours.end,
                        total_hours=rule.total_hours,
                        point_of_sales=location,
                        district=district,
                        market_name=market_name,
                        coffee_advisor="",
                    )
                )

    if skipped_rows:
        logger.debug(f"skipped {skipped_rows} rows without day columns")
    return events


def extract_schedule(
    table: Sequence[Sequence[Any]],
    reference_year: int,
    *,
    honor_detected_year: bool = False,
    market_prefix: str = DEFAULT_MARKET_PREFIX,
    quantity_rules: Mapping[float, QuantityRule] = QUANTITY_RULES,
    matchers: Sequence[HeaderMatcher] = HEADER_MATCHERS,
) -> list[PromotionEvent]:
    """Run header analysis and extraction over one raw table.

    Raises:
        HeaderParseError: month cannot be detected; no events are returned
    """
    context = analyze_header(
        table,
        reference_year,
        honor_detected_year=honor_detected_year,
        matchers=matchers,
    )
    return extract_events(
        table, context, market_prefix=market_prefix, quantity_rules=quantity_rules
    )
