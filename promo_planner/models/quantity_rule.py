from __future__ import annotations

from dataclasses import dataclass

"""Quantity code rules for planning cells.

A planning cell holds a quantity code rather than a plain count. Each known
code maps to a QuantityRule; every other non-zero value falls back to
DEFAULT_QUANTITY_RULE.
"""

__all__ = [
    "QuantityRule",
    "DEFAULT_QUANTITY_RULE",
    "QUANTITY_RULES",
]


@dataclass(frozen=True)
class QuantityRule:
    """Duration and number of promoters encoded by one cell value."""
    total_hours: int
    event_count: int = 1


DEFAULT_QUANTITY_RULE = QuantityRule(total_hours=8, event_count=1)

# value -> rule (numeric cells only)
QUANTITY_RULES: dict[float, QuantityRule] = {
    0.75: QuantityRule(total_hours=6, event_count=1),  # half day
    2: QuantityRule(total_hours=8, event_count=2),  # two promoters
}
