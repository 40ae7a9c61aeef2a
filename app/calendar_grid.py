# app/calendar_grid.py
import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import List, Optional, Tuple, Union

# domenica come primo giorno
WEEKDAYS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


@dataclass(frozen=True)
class CalendarCell:
    date: date
    is_current_month: bool
    is_today: bool


def format_date(value: Union[date, datetime]) -> str:
    # uses the value's own calendar fields: no UTC conversion, so the local day is kept
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def parse_date(text: str) -> date:
    year, month, day = (int(part) for part in text.strip().split("-"))
    return date(year, month, day)


def _sunday_offset(day: date) -> int:
    # date.weekday(): Mon=0 … Sun=6
    return (day.weekday() + 1) % 7


def build_month_grid(year: int, month: int, today: Optional[date] = None) -> List[CalendarCell]:
    """Return the Sunday-first cells covering every full week of the month.

    `month` is zero-based (0 = January). The grid starts on the Sunday on or
    before the 1st and ends on the Saturday on or after the last day, so its
    length is always a multiple of 7.
    """
    today = today or date.today()
    first = date(year, month + 1, 1)
    last = first.replace(day=calendar.monthrange(year, month + 1)[1])
    start = first - timedelta(days=_sunday_offset(first))
    end = last + timedelta(days=6 - _sunday_offset(last))

    cells = []
    cur = start
    while cur <= end:
        cells.append(CalendarCell(date=cur, is_current_month=cur.month == first.month, is_today=cur == today))
        cur = cur + timedelta(days=1)
    return cells


def weeks(cells: List[CalendarCell]) -> List[List[CalendarCell]]:
    return [cells[i:i + 7] for i in range(0, len(cells), 7)]


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Move a zero-based (year, month) by `delta` months, wrapping years."""
    total = year * 12 + month + delta
    return total // 12, total % 12


def month_title(year: int, month: int) -> str:
    return f"{calendar.month_name[month + 1]} {year}"
