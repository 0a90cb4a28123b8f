"""Pydantic schemas for YAML project files."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from .models import Priority, Status


def _coerce_date(v: Any) -> Any:
    """Accept dates, datetimes and ISO strings with or without a time part."""
    if isinstance(v, datetime):
        return v.date()
    if isinstance(v, str) and len(v.strip()) > len("YYYY-MM-DD"):
        return datetime.fromisoformat(v.strip().replace("Z", "+00:00")).date()
    return v


class TaskSchema(BaseModel):
    """Schema for one task entry."""

    title: str
    status: Status = Status.TODO
    priority: Priority = Priority.MEDIUM
    due_date: date | None = None
    created_at: date | None = None
    dependencies: list[str] = Field(default_factory=list)
    assignee: str | None = None

    @field_validator("status", mode="before")
    @classmethod
    def parse_status(cls, v: Any) -> Status:
        """Accept any spelling Status.parse understands."""
        return Status.parse(str(v))

    @field_validator("priority", mode="before")
    @classmethod
    def parse_priority(cls, v: Any) -> Priority:
        """Accept any spelling Priority.parse understands."""
        return Priority.parse(str(v))

    @field_validator("due_date", "created_at", mode="before")
    @classmethod
    def parse_dates(cls, v: Any) -> Any:
        """Drop any time-of-day part."""
        return _coerce_date(v)

    @field_validator("dependencies", mode="before")
    @classmethod
    def ensure_list(cls, v: Any) -> list[str]:
        """Ensure value is a list of strings."""
        if v is None:
            return []
        if isinstance(v, list):
            return [str(item) for item in v]  # type: ignore[misc]
        return [str(v)]


class ProjectSchema(BaseModel):
    """Schema for a whole project file."""

    id: str | None = None
    name: str = "Untitled project"
    start_date: date | None = None
    end_date: date | None = None
    tasks: dict[str, TaskSchema] = Field(default_factory=dict)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id_to_string(cls, v: Any) -> str | None:
        """Allow numeric ids."""
        if v is None:
            return None
        return str(v)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_dates(cls, v: Any) -> Any:
        """Drop any time-of-day part."""
        return _coerce_date(v)

    @field_validator("tasks", mode="before")
    @classmethod
    def coerce_task_ids(cls, v: Any) -> Any:
        """YAML turns ``12:`` into an int key; task ids are strings."""
        if isinstance(v, dict):
            return {str(key): value for key, value in v.items()}  # type: ignore[misc]
        return v
