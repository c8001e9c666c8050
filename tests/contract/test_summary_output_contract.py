from __future__ import annotations

import re
from datetime import datetime, timedelta
from pathlib import Path

from promo_planner.cli import main as cli_main
from promo_planner.logging.init import reset_logging
from promo_planner.models.processing_result import ProcessingResult
from promo_planner.services.summary import render_summary_line

"""SUMMARY line format contract."""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+files=([0-9]+)/(\1)\s+success=([0-9]+)\s+failed=([0-9]+)\s+"
    r"events=([0-9]+)\s+elapsed_sec=([0-9]+\.?[0-9]*)\s+"
    r"throughput_eps=([0-9]+\.?[0-9]*)$"
)


def test_summary_pattern_example_line():
    line = "SUMMARY files=2/2 success=1 failed=1 events=42 elapsed_sec=0.84 throughput_eps=50.0"
    m = SUMMARY_PATTERN.match(line)
    assert m, "SUMMARY line should match contract regex"


def test_rendered_summary_matches_pattern():
    start = datetime(2025, 8, 1, 9, 0, 0)
    result = ProcessingResult(
        success_files=3,
        failed_files=1,
        total_events=77,
        start_time=start,
        end_time=start + timedelta(seconds=1.5),
        elapsed_seconds=1.5,
        throughput_events_per_sec=51.333333,
    )
    line = render_summary_line(result.total_files, result)
    m = SUMMARY_PATTERN.match(line)
    assert m, line
    assert m.group(1) == "4"
    assert m.group(5) == "77"


def test_summary_tiny_throughput_has_no_exponent():
    start = datetime(2025, 8, 1)
    result = ProcessingResult(
        success_files=1,
        failed_files=0,
        total_events=1,
        start_time=start,
        end_time=start,
        elapsed_seconds=0.0001234,
        throughput_events_per_sec=0.0001,
    )
    line = render_summary_line(1, result)
    assert "e-" not in line
    assert SUMMARY_PATTERN.match(line)


def test_cli_emits_single_summary_line(temp_workdir: Path, write_config, workbook_factory, august_rows, capsys):
    reset_logging()
    workbook_factory("august.xlsx", august_rows)
    cli_main([])
    lines = [ln for ln in capsys.readouterr().out.splitlines() if ln.startswith("SUMMARY")]
    assert len(lines) == 1
    assert SUMMARY_PATTERN.match(lines[0]), lines[0]
