"""Tests for the Sunday-first month grid and date formatting."""
import calendar
from datetime import date, datetime, timedelta, timezone

import pytest

from calendar_grid import (
    WEEKDAYS,
    build_month_grid,
    format_date,
    month_title,
    parse_date,
    shift_month,
    weeks,
)


@pytest.mark.parametrize("year", [1999, 2000, 2023, 2024, 2100])
def test_every_month_is_full_weeks_with_all_days(year):
    for month in range(12):
        cells = build_month_grid(year, month, today=date(1970, 1, 1))
        assert len(cells) % 7 == 0
        current = [c for c in cells if c.is_current_month]
        assert len(current) == calendar.monthrange(year, month + 1)[1]
        assert cells[0].date.weekday() == 6  # Sunday
        assert cells[-1].date.weekday() == 5  # Saturday
        assert current[0].date == date(year, month + 1, 1)
        # contiguous days
        for a, b in zip(cells, cells[1:]):
            assert b.date - a.date == timedelta(days=1)


def test_leap_february_has_29_current_cells():
    cells = build_month_grid(2024, 1)
    assert sum(c.is_current_month for c in cells) == 29
    assert sum(c.is_current_month for c in build_month_grid(2023, 1)) == 28


def test_month_starting_sunday_has_no_leading_days():
    # September 2024 starts on a Sunday
    cells = build_month_grid(2024, 8)
    assert cells[0].date == date(2024, 9, 1)
    assert cells[0].is_current_month


def test_month_ending_saturday_has_no_trailing_days():
    # August 2024 ends on a Saturday
    cells = build_month_grid(2024, 7)
    assert cells[-1].date == date(2024, 8, 31)
    assert cells[-1].is_current_month


def test_february_2015_fits_in_four_rows():
    # starts on Sunday, 28 days, ends on Saturday
    cells = build_month_grid(2015, 1)
    assert len(cells) == 28
    assert all(c.is_current_month for c in cells)


def test_leading_and_trailing_days_belong_to_neighbour_months():
    cells = build_month_grid(2024, 2)  # March 2024 starts Friday
    assert [c.date.day for c in cells[:5]] == [25, 26, 27, 28, 29]
    assert not any(c.is_current_month for c in cells[:5])
    assert cells[5].date == date(2024, 3, 1)


def test_today_flag_set_on_exactly_one_cell():
    today = date(2024, 3, 10)
    cells = build_month_grid(2024, 2, today=today)
    flagged = [c for c in cells if c.is_today]
    assert [c.date for c in flagged] == [today]
    assert not any(c.is_today for c in build_month_grid(2024, 5, today=today))


def test_weeks_chunks_rows_of_seven():
    rows = weeks(build_month_grid(2024, 2))
    assert all(len(r) == 7 for r in rows)
    assert len(WEEKDAYS) == 7 and WEEKDAYS[0] == "Sun"


@pytest.mark.parametrize("start,delta,expected", [
    ((2024, 0), -1, (2023, 11)),
    ((2023, 11), 1, (2024, 0)),
    ((2024, 5), 1, (2024, 6)),
    ((2024, 5), -18, (2022, 11)),
])
def test_shift_month_wraps_years(start, delta, expected):
    assert shift_month(*start, delta) == expected


def test_month_title():
    assert month_title(2024, 2) == "March 2024"


def test_format_date_zero_pads():
    assert format_date(date(2024, 3, 5)) == "2024-03-05"
    assert format_date(date(987, 1, 2)) == "0987-01-02"


def test_format_date_uses_local_fields_of_datetime():
    late = datetime(2024, 3, 10, 23, 30, tzinfo=timezone(timedelta(hours=-8)))
    # the UTC day would be the 11th
    assert format_date(late) == "2024-03-10"


def test_parse_date_inverts_format_date():
    d = date(2024, 2, 29)
    assert parse_date(format_date(d)) == d


@pytest.mark.parametrize("tz_name", ["UTC", "America/Los_Angeles", "Asia/Tokyo", "Pacific/Kiritimati"])
def test_round_trip_keeps_local_day_in_any_host_zone(host_tz, tz_name):
    host_tz(tz_name)
    now = datetime.now()
    day = now.date()
    assert parse_date(format_date(now)) == day
