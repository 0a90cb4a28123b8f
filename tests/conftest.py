"""Pytest configuration and fixtures for ganttline tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from typing import Any

import pytest

from ganttline.logger import reset_logger
from ganttline.models import Priority, Project, Status, Task

DEFAULT_CREATED = date(2024, 1, 1)
TODAY = date(2024, 1, 1)


@pytest.fixture(autouse=True)
def clean_logger() -> None:
    """Reset logger state before each test for isolation."""
    reset_logger()


def make_task(  # noqa: PLR0913 - mirrors Task fields
    task_id: str,
    *,
    priority: Priority = Priority.MEDIUM,
    status: Status = Status.TODO,
    due_date: date | None = None,
    created_at: date = DEFAULT_CREATED,
    deps: tuple[str, ...] | list[str] = (),
    title: str | None = None,
) -> Task:
    """Create a Task with test defaults.

    Example:
        make_task("b", priority=Priority.HIGH, deps=["a"])
    """
    return Task(
        id=task_id,
        title=title or task_id.upper(),
        created_at=created_at,
        status=status,
        priority=priority,
        due_date=due_date,
        dependencies=tuple(deps),
    )


def make_project(
    *tasks: Task, start_date: date | None = None, end_date: date | None = None
) -> Project:
    """Wrap tasks in a Project."""
    return Project(
        id="p1", name="Test project", start_date=start_date, end_date=end_date, tasks=list(tasks)
    )


@pytest.fixture
def chain_project() -> Project:
    """The A -> B chain: A urgent with a due date, B high and dependent on A."""
    task_a = make_task("a", priority=Priority.URGENT, due_date=date(2024, 1, 10))
    task_b = make_task("b", priority=Priority.HIGH, created_at=date(2024, 1, 1), deps=["a"])
    return make_project(task_a, task_b)


@pytest.fixture
def write_yaml(tmp_path: Any) -> Callable[[str, str], Any]:
    """Write YAML text to a file in tmp_path and return its path."""

    def _write(name: str, content: str) -> Any:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
