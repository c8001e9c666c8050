from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

"""Planning workbook reader.

Decodes the first sheet of an .xlsx/.xls file into a raw table (list of rows)
without interpreting any header. Cell types are preserved: numbers stay
numbers, date cells arrive as datetime objects, blanks become None. Trailing
blank cells of each row are dropped so short rows stay short.

pandas picks the engine: openpyxl for .xlsx, xlrd for .xls.
"""

__all__ = [
    "ExcelReadError",
    "SheetTable",
    "read_schedule_table",
    "dataframe_to_table",
]

SUPPORTED_SUFFIXES = (".xlsx", ".xls")


class ExcelReadError(Exception):
    """Raised when a workbook cannot be opened or has no sheet."""


@dataclass
class SheetTable:
    sheet_name: str
    rows: list[list[Any]]


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and value == ""


def _trim_trailing_blanks(values: list[Any]) -> list[Any]:
    end = len(values)
    while end > 0 and _is_blank(values[end - 1]):
        end -= 1
    return values[:end]


def dataframe_to_table(df: pd.DataFrame) -> list[list[Any]]:
    """Convert a header-less DataFrame into ragged rows with None for blanks."""
    obj = df.astype(object)
    obj = obj.where(pd.notna(obj), None)
    return [_trim_trailing_blanks(list(raw)) for raw in obj.itertuples(index=False, name=None)]


def read_schedule_table(path: Path) -> SheetTable:
    """Read the first sheet of a planning workbook.

    Only truly empty cells count as missing: pandas' default NA strings
    ("NA", "N/A", ...) are kept as text since they may be location names.

    Raises:
        ExcelReadError: unsupported suffix, unreadable file or no sheets
    """
    if path.suffix.lower() not in SUPPORTED_SUFFIXES:
        raise ExcelReadError(f"unsupported file type: {path.name}")
    try:
        xls = pd.ExcelFile(path)
        if not xls.sheet_names:
            raise ExcelReadError(f"workbook has no sheets: {path.name}")
        sheet_name = str(xls.sheet_names[0])
        df = xls.parse(xls.sheet_names[0], header=None, keep_default_na=False, na_values=[""])
    except ExcelReadError:
        raise
    except Exception as e:
        raise ExcelReadError(f"cannot read {path.name}: {e}") from e
    return SheetTable(sheet_name=sheet_name, rows=dataframe_to_table(df))
