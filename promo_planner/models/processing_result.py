from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

"""Processing result models for a batch conversion run.

FileStat captures one workbook, ProcessingResult aggregates the whole run and
feeds the SUMMARY line.
"""


@dataclass(frozen=True)
class FileStat:
    """Per-file conversion statistics."""
    file_name: str
    status: str  # success/failed
    events: int  # emitted promotion events
    elapsed_seconds: float
    month: str | None = None  # "MM.YYYY" of the detected context
    output_path: Path | None = None  # None when nothing was written
    error: str | None = None


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results of a conversion run."""
    success_files: int
    failed_files: int
    total_events: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    throughput_events_per_sec: float
    file_stats: list[FileStat] | None = None

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files
