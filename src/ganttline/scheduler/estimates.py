"""Priority and status lookups shared by the scheduler and the views."""

from __future__ import annotations

from enum import Enum
from typing import TypeVar

from ..models import Priority, Status

DEFAULT_DURATION_DAYS = 7
DEFAULT_STATUS_COLOR = "#94a3b8"

DURATION_BY_PRIORITY: dict[Priority, int] = {
    Priority.URGENT: 1,
    Priority.HIGH: 3,
    Priority.MEDIUM: 7,
    Priority.LOW: 14,
}

PROGRESS_BY_STATUS: dict[Status, int] = {
    Status.TODO: 0,
    Status.IN_PROGRESS: 50,
    Status.IN_REVIEW: 80,
    Status.DONE: 100,
    Status.BLOCKED: 0,
}

STATUS_COLORS: dict[Status, str] = {
    Status.TODO: "#94a3b8",
    Status.IN_PROGRESS: "#3b82f6",
    Status.IN_REVIEW: "#f59e0b",
    Status.DONE: "#10b981",
    Status.BLOCKED: "#ef4444",
}

PRIORITY_COLORS: dict[Priority, str] = {
    Priority.LOW: "#10b981",
    Priority.MEDIUM: "#f59e0b",
    Priority.HIGH: "#f97316",
    Priority.URGENT: "#ef4444",
}

_E = TypeVar("_E", bound=Enum)


def _lookup(enum_cls: type[_E], value: object) -> _E | None:
    try:
        return enum_cls(value)
    except ValueError:
        return None


def estimate_duration(priority: Priority | str) -> int:
    """Estimated working time in days for a priority. Unknown priorities get 7."""
    member = _lookup(Priority, priority)
    if member is None:
        return DEFAULT_DURATION_DAYS
    return DURATION_BY_PRIORITY[member]


def progress_from_status(status: Status | str) -> int:
    """Completion percentage implied by a status."""
    member = _lookup(Status, status)
    if member is None:
        return 0
    return PROGRESS_BY_STATUS[member]


def status_color(status: Status | str) -> str:
    """Bar color for a status."""
    member = _lookup(Status, status)
    if member is None:
        return DEFAULT_STATUS_COLOR
    return STATUS_COLORS[member]


def priority_color(priority: Priority | str) -> str:
    """Badge color for a priority. Unknown priorities fall back to the medium color."""
    member = _lookup(Priority, priority)
    return PRIORITY_COLORS[member or Priority.MEDIUM]
