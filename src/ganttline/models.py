"""Data models for Ganttline."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from enum import Enum


def _normalize_key(value: str) -> str:
    """Fold "In Progress", "in-progress" and "IN_PROGRESS" onto one spelling."""
    return re.sub(r"[\s\-]+", "_", value.strip()).upper()


class Status(str, Enum):
    """Workflow status of a task."""

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    IN_REVIEW = "IN_REVIEW"
    DONE = "DONE"
    BLOCKED = "BLOCKED"

    @classmethod
    def parse(cls, value: str | Status) -> Status:
        """Parse a status string, ignoring case and separators.

        Raises:
            ValueError: If the value names no known status
        """
        if isinstance(value, Status):
            return value
        key = _normalize_key(value)
        # "INPROGRESS" and friends
        for member in cls:
            if key in (member.value, member.value.replace("_", "")):
                return member
        raise ValueError(f"Unknown status: {value!r}")


class Priority(str, Enum):
    """Task priority."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"

    @classmethod
    def parse(cls, value: str | Priority) -> Priority:
        """Parse a priority string, ignoring case.

        Raises:
            ValueError: If the value names no known priority
        """
        if isinstance(value, Priority):
            return value
        try:
            return cls(_normalize_key(value))
        except ValueError:
            raise ValueError(f"Unknown priority: {value!r}") from None


@dataclass(frozen=True)
class Task:
    """A unit of work as handed over by the task-management side.

    The scheduler only reads tasks. ``dependencies`` lists the ids this task
    cannot start before, in the order they were declared; ids that name no
    task in the project are allowed and ignored during scheduling.
    """

    id: str
    title: str
    created_at: date
    status: Status = Status.TODO
    priority: Priority = Priority.MEDIUM
    due_date: date | None = None
    dependencies: tuple[str, ...] = ()
    assignee: str | None = None

    def __post_init__(self) -> None:
        # Keep declaration order, drop repeats
        object.__setattr__(self, "dependencies", tuple(dict.fromkeys(self.dependencies)))


@dataclass
class Project:
    """A project: an optional declared date range plus its tasks."""

    id: str
    name: str
    start_date: date | None = None
    end_date: date | None = None
    tasks: list[Task] = field(default_factory=list[Task])

    def get_task_by_id(self, task_id: str) -> Task | None:
        """Get a task by its id."""
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None
