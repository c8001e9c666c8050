"""Promotion planner: monthly planning sheets -> row-per-event schedules."""

from .models.month_context import MonthContext
from .models.promotion_event import PromotionEvent
from .models.quantity_rule import QuantityRule
from .services.header_analyzer import HeaderParseError, analyze_header
from .services.schedule_extractor import clean_market_name, extract_events, extract_schedule

__version__ = "0.1.0"

__all__ = [
    "HeaderParseError",
    "MonthContext",
    "PromotionEvent",
    "QuantityRule",
    "analyze_header",
    "clean_market_name",
    "extract_events",
    "extract_schedule",
]
