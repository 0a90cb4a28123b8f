"""High-level scheduling service for projects."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from ..logger import get_logger
from ..models import Project
from .config import SchedulingConfig
from .core import BarPosition, ScheduledTask, WorkItem, build_naive
from .estimates import progress_from_status, status_color
from .grid import build_grid, dependency_connector, position, project_range, scroll_offset
from .resolver import DependencyResolver

logger = get_logger()


def _default_str_list() -> list[str]:
    return []


@dataclass(frozen=True)
class TimelineResult:
    """Complete result of one scheduling run.

    ``tasks`` is sorted by (level, start_date). Warnings are informational;
    the schedule is usable whatever they say.
    """

    tasks: list[ScheduledTask]
    grid: list[date]
    project_start: date
    project_end: date
    warnings: list[str] = field(default_factory=_default_str_list)

    def get_task(self, task_id: str) -> ScheduledTask | None:
        """Get a scheduled task by id."""
        for task in self.tasks:
            if task.task_id == task_id:
                return task
        return None

    def position(self, task: ScheduledTask) -> BarPosition:
        """Bar placement of a task on this result's grid."""
        return position(task, self.grid)

    def connectors(self, task: ScheduledTask) -> list[BarPosition]:
        """Connector lines from each scheduled prerequisite of task."""
        lines: list[BarPosition] = []
        for dep_id in task.dependencies:
            connector = dependency_connector(task, self.get_task(dep_id), self.grid)
            if connector is not None:
                lines.append(connector)
        return lines

    def scroll_offset(self) -> float:
        """Initial horizontal scroll position, in % of the grid."""
        return scroll_offset(self.tasks, self.grid)


class SchedulingService:
    """Turns a project's tasks into a resolved, rendered-ready timeline.

    Every call to schedule() starts from scratch; nothing is cached and the
    project is never modified.
    """

    def __init__(
        self,
        project: Project,
        *,
        current_date: date | None = None,
        config: SchedulingConfig | None = None,
    ):
        """Initialize the service.

        Args:
            project: Project whose tasks are scheduled
            current_date: "Today" for the fallback window. Defaults to date.today()
            config: Scheduling configuration. Defaults to SchedulingConfig()
        """
        self.project = project
        self.current_date = current_date or date.today()  # noqa: DTZ011
        self.config = config or SchedulingConfig()

    def schedule(self) -> TimelineResult:
        """Run naive scheduling, dependency resolution and grid generation."""
        items = self._build_work_items()

        resolver = DependencyResolver(items, buffer_days=self.config.buffer_days)
        resolver.resolve(self.config.resolution)
        for warning in resolver.warnings:
            logger.checks(warning)

        scheduled = sorted(
            (self._freeze(item) for item in items),
            key=lambda task: (task.level, task.start_date),
        )

        window = project_range(
            self.project.start_date,
            self.project.end_date,
            [task.due_date for task in self.project.tasks if task.due_date is not None],
            self.current_date,
            default_window_days=self.config.default_window_days,
        )
        grid = build_grid(window, scheduled, padding_days=self.config.padding_days)
        logger.debug("Grid %s .. %s (%d days)", grid[0], grid[-1], len(grid))

        return TimelineResult(
            tasks=scheduled,
            grid=grid,
            project_start=window[0],
            project_end=window[1],
            warnings=list(resolver.warnings),
        )

    def _build_work_items(self) -> list[WorkItem]:
        items: list[WorkItem] = []
        for task in self.project.tasks:
            start, end = build_naive(task)
            logger.debug("%s: naive %s .. %s", task.id, start, end)
            items.append(
                WorkItem(
                    task=task,
                    start_date=start,
                    end_date=end,
                    duration_days=(end - start).days,
                )
            )
        return items

    def _freeze(self, item: WorkItem) -> ScheduledTask:
        task = item.task
        return ScheduledTask(
            task_id=task.id,
            title=task.title,
            status=task.status,
            priority=task.priority,
            start_date=item.start_date,
            end_date=item.end_date,
            duration_days=item.duration_days,
            progress_percent=progress_from_status(task.status),
            level=item.level,
            color=status_color(task.status),
            dependencies=task.dependencies,
            assignee=task.assignee,
        )


def schedule_project(
    project: Project,
    *,
    current_date: date | None = None,
    config: SchedulingConfig | None = None,
) -> TimelineResult:
    """Schedule a project in one call."""
    return SchedulingService(project, current_date=current_date, config=config).schedule()
