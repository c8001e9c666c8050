from __future__ import annotations

import argparse
import os
import sys
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

from promo_planner.config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from promo_planner.excel.reader import ExcelReadError
from promo_planner.excel.writer import render_preview
from promo_planner.logging.init import enable_debug, log_summary, setup_logging
from promo_planner.models.config_models import PlannerConfig
from promo_planner.services.header_analyzer import HeaderParseError
from promo_planner.services.orchestrator import (
    ProcessingError,
    convert_file,
    process_all,
    scan_excel_files,
)
from promo_planner.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env, then the YAML config
- Resolve the reference year (the only place the clock is read)
- Convert the given workbooks, or every workbook in source_directory
- Print the SUMMARY line and exit with the contract exit code
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

ENV_CONFIG_PATH = "PROMO_PLANNER_CONFIG"
ENV_REFERENCE_YEAR = "PROMO_PLANNER_REFERENCE_YEAR"

# same bounds as reference_year in config_schema.json
MIN_YEAR = 1
MAX_YEAR = 9999


def _load_env_file(path: Path) -> None:
    """Load .env without overriding variables already set in the process."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="promo-planner",
        description="Convert monthly promotion planning sheets into row-per-event schedules",
    )
    p.add_argument("files", nargs="*", type=Path, help="Workbooks to convert (default: scan source_directory)")
    p.add_argument("--config", type=Path, default=None, help="Path to the YAML config")
    p.add_argument("--reference-year", type=int, default=None, help="Year the generated dates use")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument(
        "--inspect-data",
        action="store_true",
        help="Print detected month and a preview of the entries, write nothing",
    )
    return p.parse_args(argv)


def _checked_year(year: int, source: str) -> int:
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ValueError(f"{source} must be between {MIN_YEAR} and {MAX_YEAR}, got {year}")
    return year


def _resolve_reference_year(cli_value: int | None, cfg: PlannerConfig) -> int:
    """--reference-year > env > config > current year.

    Raises:
        ValueError: the environment variable is not an integer, or the flag or
            environment value lies outside MIN_YEAR..MAX_YEAR
    """
    if cli_value is not None:
        return _checked_year(cli_value, "--reference-year")
    env_value = os.getenv(ENV_REFERENCE_YEAR)
    if env_value:
        try:
            year = int(env_value)
        except ValueError as e:
            raise ValueError(f"{ENV_REFERENCE_YEAR} must be an integer") from e
        return _checked_year(year, ENV_REFERENCE_YEAR)
    if cfg.reference_year is not None:
        return cfg.reference_year
    return datetime.now().year


def _inspect_data(cfg: PlannerConfig, reference_year: int, files: list[Path]) -> int:
    if not files:
        print("inspect: no workbooks")
        return EXIT_SUCCESS_ALL
    for f in files:
        print(f"FILE: {f.name}")
        try:
            conversion = convert_file(f, cfg, reference_year)
        except (ExcelReadError, HeaderParseError) as e:
            print(f"  error={e}")
            continue
        ctx = conversion.context
        print(
            f"  SHEET: {conversion.sheet_name} month={ctx.month:02d}.{ctx.year} "
            f"detected_year={ctx.detected_year} entries={len(conversion.events)}"
        )
        print(render_preview(conversion.events))
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # [] must not fall back to sys.argv (pytest arguments would leak in)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    config_path = args.config or Path(os.getenv(ENV_CONFIG_PATH) or DEFAULT_CONFIG_PATH)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.debug:
        enable_debug()
        logger.debug("debug mode enabled")

    try:
        reference_year = _resolve_reference_year(args.reference_year, cfg)
    except ValueError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL
    logger.debug(f"reference_year={reference_year}")

    files: list[Path] | None
    if args.files:
        missing = [f for f in args.files if not f.is_file()]
        if missing:
            logger.error(f"file not found: {', '.join(str(m) for m in missing)}")
            return EXIT_FATAL
        files = list(args.files)
    else:
        directory = Path(cfg.source_directory)
        if not directory.exists():
            logger.error(f"directory not found: {directory}")
            return EXIT_FATAL
        logger.info(f"Processing files from: {directory}")
        files = None

    if args.inspect_data:
        if files is None:
            try:
                files = scan_excel_files(Path(cfg.source_directory), cfg.output_prefix)
            except ProcessingError as e:
                logger.error(f"inspect: {e}")
                return EXIT_FATAL
        return _inspect_data(cfg, reference_year, files)

    try:
        result = process_all(cfg, reference_year, files=files)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    summary_line = render_summary_line(result.total_files, result)
    # log_summary adds the "SUMMARY " label itself
    log_summary(summary_line[len("SUMMARY "):])

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
