from __future__ import annotations

from dataclasses import dataclass, field

from .quantity_rule import QUANTITY_RULES, QuantityRule

"""Config dataclasses for the promotion planner.

Separate from the YAML loader in promo_planner/config/loader.py so that the
services can depend on the typed model without pulling in yaml/jsonschema.
"""


def _default_rules() -> dict[float, QuantityRule]:
    return dict(QUANTITY_RULES)


@dataclass(frozen=True)
class PlannerConfig:
    """Root configuration for a conversion run.

    ``quantity_rules`` already contains the built-in codes merged with any
    codes declared in the YAML file (YAML entries win on conflict).
    """
    source_directory: str  # Directory scanned for planning workbooks
    output_directory: str | None = None  # None -> write next to the sources
    output_prefix: str = "processed_"
    reference_year: int | None = None  # None -> clock year at the CLI boundary
    honor_detected_year: bool = False  # False keeps the reference-year policy
    market_prefix: str = "MM"  # Site tag stripped from market names
    quantity_rules: dict[float, QuantityRule] = field(default_factory=_default_rules)

    @property
    def resolved_output_directory(self) -> str:
        return self.output_directory or self.source_directory
