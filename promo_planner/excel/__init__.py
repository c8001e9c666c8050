"""Workbook input/output for planning sheets and exported schedules."""

from .reader import ExcelReadError, SheetTable, read_schedule_table
from .writer import render_preview, write_schedule_workbook

__all__ = [
    "ExcelReadError",
    "SheetTable",
    "read_schedule_table",
    "render_preview",
    "write_schedule_workbook",
]
