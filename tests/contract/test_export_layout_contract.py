from __future__ import annotations

from pathlib import Path

from openpyxl import load_workbook

from promo_planner.excel.writer import SHEET_NAME, write_schedule_workbook
from promo_planner.models.promotion_event import EXPORT_HEADERS, PromotionEvent

"""Exported workbook layout contract: one sheet, nine fixed columns."""

EXPECTED_HEADERS = [
    "Tag der Woche",
    "Datum",
    "Startzeit",
    "Endzeit",
    "Gesamtstunden",
    "Point of Sales",
    "Bezirk",
    "Marktname",
    "Coffee Advisor",
]


def test_export_headers_are_fixed():
    assert list(EXPORT_HEADERS) == EXPECTED_HEADERS


def test_export_workbook_layout(temp_workdir: Path):
    event = PromotionEvent("Mo", "04.08.2025", "09:30", "18:30", 8, "MM Kiel", "Nord", "Kiel")
    out = write_schedule_workbook([event], temp_workdir / "out" / "processed_x.xlsx")

    wb = load_workbook(out)
    assert wb.sheetnames == [SHEET_NAME]
    ws = wb[SHEET_NAME]
    assert [c.value for c in ws[1]] == EXPECTED_HEADERS
    row = [c.value for c in ws[2]]
    assert row[:8] == ["Mo", "04.08.2025", "09:30", "18:30", 8, "MM Kiel", "Nord", "Kiel"]
    assert row[8] in (None, "")
