"""YAML parser for Ganttline project files."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ParseError, ValidationError
from .models import Project, Task
from .schemas import ProjectSchema


class ProjectParser:
    """Parser for project YAML files.

    A project file looks like::

        name: Website relaunch
        start_date: 2024-01-01
        tasks:
          design:
            title: Design mockups
            priority: high
            due_date: 2024-01-10
          build:
            title: Build pages
            dependencies: [design]

    Tasks keep the order they appear in the file.
    """

    def __init__(self, today: date | None = None):
        """Initialize the parser.

        Args:
            today: created_at for tasks that do not give one. Defaults to date.today()
        """
        self.today = today or date.today()  # noqa: DTZ011

    def parse_file(self, file_path: Path | str) -> Project:
        """Parse a YAML file into a Project."""
        path = Path(file_path)
        if not path.exists():
            raise ParseError(f"File not found: {file_path}")

        try:
            with path.open(encoding="utf-8") as f:
                data: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ParseError(f"Failed to parse YAML: {e}") from e

        if not isinstance(data, dict):
            raise ParseError("YAML must contain a dictionary at the root level")

        data.setdefault("id", path.stem)
        return self.parse_data(data)  # type: ignore[arg-type]

    def parse_data(self, data: dict[str, Any]) -> Project:
        """Parse already-loaded YAML data into a Project."""
        try:
            schema = ProjectSchema.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid project structure: {e}") from e

        tasks = [
            Task(
                id=task_id,
                title=task_data.title,
                created_at=task_data.created_at or self.today,
                status=task_data.status,
                priority=task_data.priority,
                due_date=task_data.due_date,
                dependencies=tuple(task_data.dependencies),
                assignee=task_data.assignee,
            )
            for task_id, task_data in schema.tasks.items()
        ]

        return Project(
            id=schema.id or "project",
            name=schema.name,
            start_date=schema.start_date,
            end_date=schema.end_date,
            tasks=tasks,
        )


def load_project(path: Path | str, today: date | None = None) -> Project:
    """Load a project file."""
    return ProjectParser(today=today).parse_file(path)
