"""Timeline grid generation and bar placement."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, timedelta

from .core import BarPosition, ScheduledTask

DEFAULT_PADDING_DAYS = 7
DEFAULT_WINDOW_DAYS = 30
SCROLL_LEAD_PERCENT = 20  # Earliest bar lands this far from the left edge


def project_range(
    start_date: date | None,
    end_date: date | None,
    due_dates: Sequence[date],
    current_date: date,
    *,
    default_window_days: int = DEFAULT_WINDOW_DAYS,
) -> tuple[date, date]:
    """Work out the project window before tasks are taken into account.

    A fully declared (start, end) pair is used as-is. Otherwise the window
    spans the task due dates, stretched to any single declared bound. With no
    dates at all it runs ``default_window_days`` from current_date.
    """
    if start_date is not None and end_date is not None:
        return start_date, end_date

    known = [*due_dates, *(d for d in (start_date, end_date) if d is not None)]
    if not known:
        return current_date, current_date + timedelta(days=default_window_days)
    return min(known), max(known)


def build_grid(
    window: tuple[date, date],
    tasks: Sequence[ScheduledTask],
    *,
    padding_days: int = DEFAULT_PADDING_DAYS,
) -> list[date]:
    """List every day the timeline shows, in order.

    The window is widened to cover every task with ``padding_days`` to spare
    on both sides. The result always holds at least one day.
    """
    start, end = window
    if tasks:
        padding = timedelta(days=padding_days)
        start = min(start, min(task.start_date for task in tasks) - padding)
        end = max(end, max(task.end_date for task in tasks) + padding)
    end = max(end, start)
    return [start + timedelta(days=offset) for offset in range((end - start).days + 1)]


def position(task: ScheduledTask, grid: Sequence[date]) -> BarPosition:
    """Place a task's bar on the grid as (left %, width %).

    Bars never start left of the grid and are at least one day wide. An
    empty grid puts every bar across the full width.
    """
    if not grid:
        return BarPosition(left_percent=0.0, width_percent=100.0)

    total_days = len(grid)
    offset_days = max(0, (task.start_date - grid[0]).days)
    width_days = max(1, task.duration_days)
    return BarPosition(
        left_percent=offset_days / total_days * 100,
        width_percent=width_days / total_days * 100,
    )


def dependency_connector(
    task: ScheduledTask, dependency: ScheduledTask | None, grid: Sequence[date]
) -> BarPosition | None:
    """Line from the right edge of dependency's bar to the left edge of task's.

    Returns None when the dependency is not on the timeline. Overlapping bars
    give a zero-width connector.
    """
    if dependency is None:
        return None
    dep_end = position(dependency, grid).right_percent
    task_start = position(task, grid).left_percent
    return BarPosition(left_percent=dep_end, width_percent=max(0.0, task_start - dep_end))


def scroll_offset(tasks: Sequence[ScheduledTask], grid: Sequence[date]) -> float:
    """Horizontal scroll (in % of the grid) that brings the earliest task into view."""
    if not tasks or not grid:
        return 0.0
    earliest = min(task.start_date for task in tasks)
    offset_days = (earliest - grid[0]).days
    return max(0.0, offset_days / len(grid) * 100 - SCROLL_LEAD_PERCENT)
