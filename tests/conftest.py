# Shared pytest fixtures
from __future__ import annotations
import logging
import tempfile
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

import pandas as pd
import pytest

from promo_planner.logging.init import APP_LOGGER_NAME, reset_logging


def make_planning_workbook(path: Path, rows: list[list[Any]], sheet_name: str = "Planung") -> Path:
    """Write raw rows (no header handling) to an .xlsx file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, header=False, index=False)
    return path


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("PROMO_PLANNER_CONFIG", raising=False)
        monkeypatch.delenv("PROMO_PLANNER_REFERENCE_YEAR", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
output_directory: ./out
reference_year: 2025
market_prefix: MM
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "planner.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def august_header() -> list[Any]:
    """Header row with real date cells for August 2025."""
    return ["Markt", "Bezirk", "Kategorie", "Notiz"] + [datetime(2025, 8, d) for d in range(1, 32)]


@pytest.fixture()
def august_rows(august_header: list[Any]) -> list[list[Any]]:
    return [
        august_header,
        ["MM North", "East", None, None, 1, 0.75, 2, 0],
        ["MM South", "West", None, None, None, None, None, None, 1],
        ["short", "row", None],
    ]


@pytest.fixture()
def workbook_factory(temp_workdir: Path) -> Callable[..., Path]:
    def _factory(name: str, rows: list[list[Any]], sheet_name: str = "Planung") -> Path:
        return make_planning_workbook(temp_workdir / "data" / name, rows, sheet_name)
    return _factory


@pytest.fixture(autouse=True)
def _reset_app_logging():
    """Drop handlers bound to a test's captured stdout."""
    yield
    reset_logging()
    app_logger = logging.getLogger(APP_LOGGER_NAME)
    for handler in app_logger.handlers[:]:
        app_logger.removeHandler(handler)
    app_logger.setLevel(logging.NOTSET)
