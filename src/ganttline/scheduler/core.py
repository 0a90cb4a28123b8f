"""Core dataclasses for the timeline scheduler."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

from ..models import Priority, Status, Task
from .estimates import estimate_duration


@dataclass
class WorkItem:
    """Mutable scheduling state for one task during a single run.

    Created from the naive schedule, adjusted in place by the dependency
    resolver, then frozen into a ScheduledTask. Never outlives the run.
    """

    task: Task
    start_date: date
    end_date: date
    duration_days: int
    level: int = 0

    @property
    def task_id(self) -> str:
        return self.task.id

    @property
    def dependencies(self) -> tuple[str, ...]:
        return self.task.dependencies

    def shift_start(self, new_start: date) -> None:
        """Move the task to start on new_start, keeping its duration."""
        self.start_date = new_start
        self.end_date = new_start + timedelta(days=self.duration_days)


@dataclass(frozen=True)
class ScheduledTask:
    """A task with its resolved dates, ready for rendering."""

    task_id: str
    title: str
    status: Status
    priority: Priority
    start_date: date
    end_date: date
    duration_days: int
    progress_percent: int
    level: int
    color: str
    dependencies: tuple[str, ...] = ()
    assignee: str | None = None


@dataclass(frozen=True)
class BarPosition:
    """Horizontal placement of a bar as percentages of the grid width."""

    left_percent: float
    width_percent: float

    @property
    def right_percent(self) -> float:
        return self.left_percent + self.width_percent

    def css(self) -> dict[str, str]:
        """Return ``left``/``width`` as CSS percentage strings."""
        return {"left": f"{self.left_percent}%", "width": f"{self.width_percent}%"}


def build_naive(task: Task) -> tuple[date, date]:
    """Compute a task's (start, end) in isolation from every other task.

    With a due date the task is placed to finish on it; otherwise it starts
    on its creation date. Either way it spans the priority's estimate.
    """
    duration = timedelta(days=estimate_duration(task.priority))
    if task.due_date is not None:
        return task.due_date - duration, task.due_date
    return task.created_at, task.created_at + duration
