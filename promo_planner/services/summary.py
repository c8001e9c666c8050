from __future__ import annotations

from ..models.processing_result import ProcessingResult

"""SUMMARY line rendering for a conversion run."""


def _format_number(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # avoid scientific notation
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(round(value, 3))


def render_summary_line(total_files: int, result: ProcessingResult) -> str:
    """Render the SUMMARY line.

    Format:
    SUMMARY files={total}/{total} success={success} failed={failed}
    events={events} elapsed_sec={elapsed} throughput_eps={throughput}

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2025, 8, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2025, 8, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = ProcessingResult(
        ...     success_files=1, failed_files=0, total_events=120,
        ...     start_time=start, end_time=end,
        ...     elapsed_seconds=2.0, throughput_events_per_sec=60.0
        ... )
        >>> render_summary_line(1, result)
        'SUMMARY files=1/1 success=1 failed=0 events=120 elapsed_sec=2 throughput_eps=60'
    """
    return (
        f"SUMMARY files={total_files}/{total_files} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"events={result.total_events} "
        f"elapsed_sec={_format_number(result.elapsed_seconds)} "
        f"throughput_eps={_format_number(result.throughput_events_per_sec)}"
    )
