from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import PlannerConfig
from ..models.quantity_rule import QUANTITY_RULES, QuantityRule

"""Config loader.

Responsibilities:
- Load the YAML config (default config/planner.yml)
- Validate it against the bundled JSON schema
- Apply defaults and merge custom quantity rules over the built-in ones
"""

SCHEMA_DIR = Path(__file__).parent / "schemas"
SCHEMA_PATH = SCHEMA_DIR / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/planner.yml")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing or invalid, or the config violates it
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _build_quantity_rules(raw: list[dict[str, Any]] | None) -> dict[float, QuantityRule]:
    rules = dict(QUANTITY_RULES)
    for entry in raw or []:
        rules[entry["value"]] = QuantityRule(
            total_hours=entry["hours"], event_count=entry.get("events", 1)
        )
    return rules


def load_config(path: Path) -> PlannerConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)

    return PlannerConfig(
        source_directory=data["source_directory"],
        output_directory=data.get("output_directory"),
        output_prefix=data.get("output_prefix", "processed_"),
        reference_year=data.get("reference_year"),
        honor_detected_year=data.get("honor_detected_year", False),
        market_prefix=data.get("market_prefix", "MM"),
        quantity_rules=_build_quantity_rules(data.get("quantity_rules")),
    )
