from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

import pandas as pd  # type: ignore
import pytest
from openpyxl import load_workbook

from promo_planner.cli import main as cli_main
from promo_planner.logging.init import reset_logging

"""Integration test: successful multi-file run.

Two planning workbooks, one with real date cells in the header and one with
text headers ("01.Sep" style), are converted end to end through the CLI; the
exported workbooks and the SUMMARY line are checked.
"""


def _make_excel_file(path: Path, rows: list[list[object]], sheet_name: str = "Planung") -> Path:
    with pd.ExcelWriter(path, engine='openpyxl') as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, header=False, index=False)
    return path


@pytest.fixture
def two_month_setup(temp_workdir: Path, write_config: Any) -> Dict[str, Any]:
    data_dir = temp_workdir / "data"

    august = _make_excel_file(
        data_dir / "august.xlsx",
        [
            ["Markt", "Bezirk", "Typ", "Notiz"] + [datetime(2025, 8, d) for d in range(1, 32)],
            ["MM Berlin Mitte", "Mitte", None, None, 1, 0.75, 2, 0],
            ["MM Hamburg", "Nord", None, None, None, None, None, None, None, None, None, None, None, None, 1],
            ["Zwischensumme"],
        ],
    )
    september = _make_excel_file(
        data_dir / "september.xlsx",
        [
            ["Markt", "Bezirk", "Typ", "Notiz"] + [f"{d:02d}.Sep" for d in range(1, 31)],
            ["MM Köln", "West", None, None] + [None] * 29 + [2],
        ],
        sheet_name="Sep",
    )
    return {
        "august": august,
        "september": september,
        "expected_events": 4 + 1 + 2,
    }


def test_multi_file_run_success_integration(temp_workdir: Path, two_month_setup: Dict[str, Any], capsys: Any) -> None:
    reset_logging()

    code = cli_main([])
    out = capsys.readouterr().out

    assert code == 0
    assert "INFO Successfully processed 5 promotion entries from august.xlsx" in out
    assert "INFO Successfully processed 2 promotion entries from september.xlsx" in out

    m = re.search(r"SUMMARY files=(\d+)/\1 success=(\d+) failed=(\d+) events=(\d+)", out)
    assert m, out
    assert m.group(1) == "2"
    assert m.group(2) == "2"
    assert m.group(3) == "0"
    assert int(m.group(4)) == two_month_setup["expected_events"]

    ws = load_workbook(temp_workdir / "out" / "processed_august.xlsx")["Promotions"]
    rows = [[c.value for c in r][:8] for r in ws.iter_rows(min_row=2)]
    assert rows == [
        ["Fr", "01.08.2025", "09:30", "18:30", 8, "MM Berlin Mitte", "Mitte", "Berlin Mitte"],
        ["Sa", "02.08.2025", "09:00", "18:00", 6, "MM Berlin Mitte", "Mitte", "Berlin Mitte"],
        ["So", "03.08.2025", "09:00", "18:00", 8, "MM Berlin Mitte", "Mitte", "Berlin Mitte"],
        ["So", "03.08.2025", "09:00", "18:00", 8, "MM Berlin Mitte", "Mitte", "Berlin Mitte"],
        ["Mo", "11.08.2025", "09:30", "18:30", 8, "MM Hamburg", "Nord", "Hamburg"],
    ]

    ws = load_workbook(temp_workdir / "out" / "processed_september.xlsx")["Promotions"]
    rows = [[c.value for c in r][:8] for r in ws.iter_rows(min_row=2)]
    # 30.09.2025 is a Tuesday; value 2 -> two promoters
    assert rows == [["Di", "30.09.2025", "09:30", "18:30", 8, "MM Köln", "West", "Köln"]] * 2


def test_rerun_skips_exported_files(temp_workdir: Path, two_month_setup: Dict[str, Any], capsys: Any) -> None:
    """Exports written into the source directory are not picked up again."""
    cfg = temp_workdir / "config" / "planner.yml"
    cfg.write_text("source_directory: ./data\nreference_year: 2025\n", encoding="utf-8")

    reset_logging()
    assert cli_main([]) == 0
    assert (temp_workdir / "data" / "processed_august.xlsx").exists()
    capsys.readouterr()

    reset_logging()
    assert cli_main([]) == 0
    assert "SUMMARY files=2/2" in capsys.readouterr().out
