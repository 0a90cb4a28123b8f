"""Timeline navigation and date labels."""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from enum import Enum

MONTHS_PER_YEAR = 12
MONTHS_PER_QUARTER = 3
DAYS_PER_WEEK = 7


class ViewMode(str, Enum):
    """How far one navigation step moves the view."""

    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"


class Direction(str, Enum):
    """Navigation direction."""

    PREV = "prev"
    NEXT = "next"


def add_months(day: date, months: int) -> date:
    """Shift by whole months, clamping to the last day of shorter months."""
    month_index = day.year * MONTHS_PER_YEAR + (day.month - 1) + months
    year, month = divmod(month_index, MONTHS_PER_YEAR)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def navigate(current: date, mode: ViewMode, direction: Direction) -> date:
    """Move the view's reference date one step back or forward."""
    sign = -1 if direction == Direction.PREV else 1
    if mode == ViewMode.WEEK:
        return current + timedelta(days=sign * DAYS_PER_WEEK)
    if mode == ViewMode.MONTH:
        return add_months(current, sign)
    return add_months(current, sign * MONTHS_PER_QUARTER)


def format_day(day: date, today: date | None = None) -> str:
    """Short label for a grid day: "Jan 5", or "Jan 5, 2023" outside the current year."""
    today = today or date.today()  # noqa: DTZ011
    label = f"{day:%b} {day.day}"
    if day.year != today.year:
        label += f", {day.year}"
    return label
