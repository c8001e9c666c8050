from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from ..excel.reader import SUPPORTED_SUFFIXES, ExcelReadError, read_schedule_table
from ..excel.writer import write_schedule_workbook
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.config_models import PlannerConfig
from ..models.month_context import MonthContext
from ..models.processing_result import FileStat, ProcessingResult
from ..models.promotion_event import PromotionEvent
from .header_analyzer import HeaderParseError, analyze_header
from .progress import ProgressTracker
from .schedule_extractor import extract_events

"""Service orchestration for a conversion run.

Coordinates: scanning the source directory, decoding each workbook, running
header analysis and extraction, writing the exported workbook, error logging
and metrics aggregation. A failing file never stops the run; only directory
problems are fatal.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "ProcessingError",
    "FileConversion",
    "scan_excel_files",
    "output_path_for",
    "convert_file",
    "process_all",
]


class ProcessingError(Exception):
    """Fatal run-level error (source directory missing or unreadable)."""


@dataclass(frozen=True)
class FileConversion:
    """Result of converting one workbook (nothing written yet)."""
    path: Path
    sheet_name: str
    context: MonthContext
    events: list[PromotionEvent]


def _is_candidate(path: Path, output_prefix: str) -> bool:
    if not path.is_file() or path.suffix.lower() not in SUPPORTED_SUFFIXES:
        return False
    if path.name.startswith("~$"):  # Office lock file
        return False
    if output_prefix and path.name.startswith(output_prefix):
        return False
    return True


def scan_excel_files(directory: Path, output_prefix: str = "processed_") -> list[Path]:
    """Planning workbooks in ``directory`` (non-recursive, sorted by name).

    Raises:
        ProcessingError: directory missing, not a directory or unreadable
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")

    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")

    try:
        return sorted(p for p in directory.iterdir() if _is_candidate(p, output_prefix))
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def output_path_for(source: Path, config: PlannerConfig) -> Path:
    """``<output dir>/<prefix><stem>.xlsx``; .xls sources are exported as .xlsx."""
    return Path(config.resolved_output_directory) / f"{config.output_prefix}{source.stem}.xlsx"


def convert_file(path: Path, config: PlannerConfig, reference_year: int) -> FileConversion:
    """Read one workbook and extract its schedule.

    Raises:
        ExcelReadError: the workbook cannot be decoded
        HeaderParseError: no month in the header row
    """
    sheet = read_schedule_table(path)
    context = analyze_header(
        sheet.rows, reference_year, honor_detected_year=config.honor_detected_year
    )
    events = extract_events(
        sheet.rows,
        context,
        market_prefix=config.market_prefix,
        quantity_rules=config.quantity_rules,
    )
    return FileConversion(path=path, sheet_name=sheet.sheet_name, context=context, events=events)


def process_all(
    config: PlannerConfig,
    reference_year: int,
    files: Sequence[Path] | None = None,
) -> ProcessingResult:
    """Convert every planning workbook and write the exported schedules.

    Args:
        config: Planner configuration
        reference_year: Year the generated dates are anchored to
        files: Explicit workbooks to convert; None scans ``source_directory``

    Raises:
        ProcessingError: source directory cannot be scanned
    """
    start_time = datetime.now(UTC)
    error_log = ErrorLogBuffer()

    if files is None:
        file_paths = scan_excel_files(Path(config.source_directory), config.output_prefix)
    else:
        file_paths = list(files)

    file_stats: list[FileStat] = []
    success_files = 0
    failed_files = 0
    total_events = 0

    with ProgressTracker(len(file_paths)) as progress:
        for path in file_paths:
            progress.start_file(path)
            t0 = time.perf_counter()
            try:
                conversion = convert_file(path, config, reference_year)
            except (ExcelReadError, HeaderParseError) as e:
                elapsed = time.perf_counter() - t0
                failed_files += 1
                error_type = "HEADER_PARSE" if isinstance(e, HeaderParseError) else "READ_ERROR"
                logger.error(f"Error processing file {path.name}: {e}")
                error_log.append(ErrorRecord.create(path.name, "", -1, error_type, str(e)))
                file_stats.append(
                    FileStat(
                        file_name=path.name,
                        status="failed",
                        events=0,
                        elapsed_seconds=elapsed,
                        error=str(e),
                    )
                )
                progress.finish_file()
                continue

            ctx = conversion.context
            month_label = f"{ctx.month:02d}.{ctx.year}"
            logger.debug(f"{path.name}: sheet={conversion.sheet_name} month={month_label}")

            output_path: Path | None = None
            if conversion.events:
                output_path = write_schedule_workbook(conversion.events, output_path_for(path, config))
                logger.info(
                    f"Successfully processed {len(conversion.events)} promotion entries "
                    f"from {path.name} -> {output_path.name}"
                )
            else:
                logger.warning(f"no promotion entries in {path.name}; nothing written")

            elapsed = time.perf_counter() - t0
            success_files += 1
            total_events += len(conversion.events)
            file_stats.append(
                FileStat(
                    file_name=path.name,
                    status="success",
                    events=len(conversion.events),
                    elapsed_seconds=elapsed,
                    month=month_label,
                    output_path=output_path,
                )
            )
            progress.finish_file(events=len(conversion.events))

    log_path = error_log.flush()
    if log_path is not None:
        logger.info(f"error log written: {log_path}")

    end_time = datetime.now(UTC)
    elapsed_total = (end_time - start_time).total_seconds()
    throughput = total_events / elapsed_total if elapsed_total > 0 else 0.0
    return ProcessingResult(
        success_files=success_files,
        failed_files=failed_files,
        total_events=total_events,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed_total,
        throughput_events_per_sec=throughput,
        file_stats=file_stats,
    )
