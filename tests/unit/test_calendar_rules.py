from __future__ import annotations

from datetime import date, datetime

import pytest

from promo_planner.services.calendar_rules import (
    WEEKDAY_NAMES,
    day_of_week,
    days_in_month,
    format_date,
    serial_to_datetime,
    working_hours,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        (date(2025, 8, 1), "Fr"),
        (date(2025, 8, 2), "Sa"),
        (date(2025, 8, 3), "So"),
        (date(2025, 8, 4), "Mo"),
        (date(2025, 7, 1), "Di"),
    ],
)
def test_day_of_week_german_names(value: date, expected: str):
    assert day_of_week(value) == expected


def test_weekday_names_cover_week():
    assert WEEKDAY_NAMES == ("Mo", "Di", "Mi", "Do", "Fr", "Sa", "So")


def test_working_hours_weekend_and_weekday():
    assert (working_hours("Sa").start, working_hours("Sa").end) == ("09:00", "18:00")
    assert (working_hours("So").start, working_hours("So").end) == ("09:00", "18:00")
    for name in ("Mo", "Di", "Mi", "Do", "Fr"):
        hours = working_hours(name)
        assert (hours.start, hours.end) == ("09:30", "18:30")


def test_days_in_month_uses_zero_based_index():
    assert days_in_month(2025, 0) == 31
    assert days_in_month(2025, 1) == 28
    assert days_in_month(2024, 1) == 29
    assert days_in_month(2025, 3) == 30
    assert days_in_month(2025, 11) == 31


def test_serial_to_datetime_epoch_and_known_dates():
    assert serial_to_datetime(0) == datetime(1899, 12, 30)
    assert serial_to_datetime(45658) == datetime(2025, 1, 1)
    assert serial_to_datetime(45870) == datetime(2025, 8, 1)
    # fractional part is time of day
    assert serial_to_datetime(45870.5) == datetime(2025, 8, 1, 12, 0)


def test_serial_to_datetime_out_of_range():
    with pytest.raises(OverflowError):
        serial_to_datetime(10**9)


def test_format_date_zero_padded():
    assert format_date(3, 7, 2025) == "03.08.2025"
    assert format_date(31, 11, 2025) == "31.12.2025"
