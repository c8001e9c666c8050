from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pandas as pd
from openpyxl.styles import Border, PatternFill, Side
from openpyxl.utils import get_column_letter

from ..models.promotion_event import EXPORT_HEADERS, PREVIEW_HEADERS, PromotionEvent

"""Workbook writer and preview rendering for extracted schedules.

Layout of the exported sheet:
- sheet "Promotions", one header row with the German labels
- fixed column widths
- autofilter over header + all data rows
- the last column (Coffee Advisor) highlighted and bordered on every data row
  so it stands out for manual fill-in
"""

__all__ = [
    "SHEET_NAME",
    "COLUMN_WIDTHS",
    "PREVIEW_LIMIT",
    "events_to_frame",
    "write_schedule_workbook",
    "render_preview",
]

SHEET_NAME = "Promotions"
COLUMN_WIDTHS: tuple[int, ...] = (14, 12, 10, 10, 14, 32, 18, 28, 20)
PREVIEW_LIMIT = 50

ADVISOR_FILL = PatternFill(start_color="FFFF00", end_color="FFFF00", fill_type="solid")
_THIN = Side(style="thin", color="000000")
ADVISOR_BORDER = Border(left=_THIN, right=_THIN, top=_THIN, bottom=_THIN)


def events_to_frame(
    events: Sequence[PromotionEvent], headers: Sequence[str] = EXPORT_HEADERS
) -> pd.DataFrame:
    return pd.DataFrame([e.as_row() for e in events], columns=list(headers))


def write_schedule_workbook(events: Sequence[PromotionEvent], path: Path) -> Path:
    """Write events to an .xlsx workbook and return the path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    df = events_to_frame(events)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=SHEET_NAME, index=False)
        ws = writer.sheets[SHEET_NAME]

        for idx, width in enumerate(COLUMN_WIDTHS, start=1):
            ws.column_dimensions[get_column_letter(idx)].width = width

        last_col = len(EXPORT_HEADERS)
        last_row = len(df) + 1  # header occupies row 1
        ws.auto_filter.ref = f"A1:{get_column_letter(last_col)}{last_row}"

        for row in range(2, last_row + 1):
            cell = ws.cell(row=row, column=last_col)
            cell.fill = ADVISOR_FILL
            cell.border = ADVISOR_BORDER
    return path


def render_preview(events: Sequence[PromotionEvent], limit: int = PREVIEW_LIMIT) -> str:
    """Text table of the first ``limit`` events, with a note when truncated."""
    if not events:
        return "(no entries)"
    text = events_to_frame(events[:limit], PREVIEW_HEADERS).to_string(index=False)
    if len(events) > limit:
        text += f"\nShowing first {limit} entries. Export to see all {len(events)} entries."
    return text
