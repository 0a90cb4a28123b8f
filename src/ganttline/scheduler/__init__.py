"""Scheduler package - dependency-ordered timeline layout.

Pipeline, leaf first:
- estimates: priority -> duration, status -> progress/color
- core.build_naive: per-task dates ignoring dependencies
- resolver: dependency levels and start-date pushes
- grid: the day grid and bar/connector placement

Main entry points:
- SchedulingService / schedule_project: run the whole pipeline
- TimelineResult: sorted tasks, grid and warnings
"""

from .config import ResolutionMode, SchedulingConfig
from .core import BarPosition, ScheduledTask, WorkItem, build_naive
from .estimates import (
    estimate_duration,
    priority_color,
    progress_from_status,
    status_color,
)
from .grid import build_grid, dependency_connector, position, project_range, scroll_offset
from .resolver import DependencyResolver, resolve_dependencies
from .service import SchedulingService, TimelineResult, schedule_project

__all__ = [
    # Configuration
    "ResolutionMode",
    "SchedulingConfig",
    # Core dataclasses
    "BarPosition",
    "ScheduledTask",
    "TimelineResult",
    "WorkItem",
    # Pure helpers
    "build_naive",
    "estimate_duration",
    "priority_color",
    "progress_from_status",
    "status_color",
    # Grid and placement
    "build_grid",
    "dependency_connector",
    "position",
    "project_range",
    "scroll_offset",
    # Resolution
    "DependencyResolver",
    "resolve_dependencies",
    # High-level service
    "SchedulingService",
    "schedule_project",
]
