"""Domain models for the promotion planner."""

from .config_models import PlannerConfig
from .error_record import ErrorRecord
from .month_context import MonthContext
from .processing_result import FileStat, ProcessingResult
from .promotion_event import EXPORT_HEADERS, PREVIEW_HEADERS, PromotionEvent
from .quantity_rule import DEFAULT_QUANTITY_RULE, QUANTITY_RULES, QuantityRule

__all__ = [
    # Configuration models
    "PlannerConfig",
    # Extraction models
    "MonthContext",
    "PromotionEvent",
    "QuantityRule",
    "QUANTITY_RULES",
    "DEFAULT_QUANTITY_RULE",
    "EXPORT_HEADERS",
    "PREVIEW_HEADERS",
    # Run results
    "ErrorRecord",
    "FileStat",
    "ProcessingResult",
]
