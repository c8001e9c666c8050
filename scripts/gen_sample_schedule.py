#!/usr/bin/env python3
"""Generate a synthetic monthly promotion planning workbook.

Layout of the generated sheet:
- Row 1: header; columns A-D are labels, columns E.. hold one real date per day
- Row 2+: one row per sales location with quantity codes per day
  (blank, 1, 0.75 or 2)

Useful for trying the CLI without a real planning file.
"""
from __future__ import annotations

import argparse
import calendar
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

CITIES = ["Berlin", "Hamburg", "München", "Köln", "Leipzig", "Dresden", "Bremen", "Essen"]
DISTRICTS = ["Nord", "Süd", "Ost", "West", "Mitte"]
CODES = [None, 1, 0.75, 2]


def generate_planning_rows(
    year: int, month: int, locations: int, density: float = 0.3, seed: int = 42
) -> list[list[Any]]:
    """Build header + location rows for one month.

    Args:
        year: Calendar year of the header dates
        month: 1-based month
        locations: Number of location rows
        density: Share of day cells that carry a quantity code
        seed: Random seed for reproducible data
    """
    rng = np.random.default_rng(seed)
    days = calendar.monthrange(year, month)[1]

    header: list[Any] = ["Markt", "Bezirk", "Kategorie", "Notiz"]
    header += [datetime(year, month, d) for d in range(1, days + 1)]
    rows: list[list[Any]] = [header]

    for i in range(locations):
        city = CITIES[i % len(CITIES)]
        row: list[Any] = [f"MM {city} {i + 1}", str(rng.choice(DISTRICTS)), None, None]
        active = rng.random(days) < density
        # codes other than blank: mostly full days
        picks = rng.choice([1, 2, 3], size=days, p=[0.7, 0.2, 0.1])
        row += [CODES[int(p)] if on else None for on, p in zip(active, picks)]
        rows.append(row)
    return rows


def create_planning_workbook(output_path: Path, rows: list[list[Any]], sheet_name: str = "Planung") -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, header=False, index=False)


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate a synthetic promotion planning workbook")
    parser.add_argument("output", type=Path, help="Output .xlsx path")
    parser.add_argument("--year", type=int, default=datetime.now().year)
    parser.add_argument("--month", type=int, default=datetime.now().month)
    parser.add_argument("--locations", type=int, default=20)
    parser.add_argument("--density", type=float, default=0.3)
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args()

    if not 1 <= args.month <= 12:
        print(f"invalid month: {args.month}", file=sys.stderr)
        return 1

    rows = generate_planning_rows(args.year, args.month, args.locations, args.density, args.seed)
    create_planning_workbook(args.output, rows)
    print(f"Created {args.output} ({args.locations} locations, {args.month:02d}.{args.year})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
