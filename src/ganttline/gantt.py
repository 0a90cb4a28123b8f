"""Chart output for scheduled timelines - Mermaid and plain text."""

from __future__ import annotations

import re
from datetime import date
from itertools import groupby

from .models import Status
from .navigation import format_day
from .scheduler import ScheduledTask, TimelineResult

_MERMAID_TAGS: dict[Status, str] = {
    Status.DONE: "done",
    Status.BLOCKED: "crit",
    Status.IN_PROGRESS: "active",
    Status.IN_REVIEW: "active",
}


def _mermaid_id(task_id: str) -> str:
    """Mermaid task ids may only hold word characters."""
    return re.sub(r"\W", "_", task_id)


def _mermaid_label(task: ScheduledTask) -> str:
    """Task title plus assignee; colons and hashes break Mermaid's task syntax."""
    label = task.title
    if task.assignee:
        label += f" ({task.assignee})"
    return label.replace(":", " ").replace("#", " ")


def _mermaid_task_line(task: ScheduledTask) -> str:
    tag = _MERMAID_TAGS.get(task.status)
    tags_str = f"{tag}, " if tag else ""
    start_str = task.start_date.strftime("%Y-%m-%d")
    return (
        f"    {_mermaid_label(task)} :{tags_str}{_mermaid_id(task.task_id)}, "
        f"{start_str}, {task.duration_days}d"
    )


def generate_mermaid(
    result: TimelineResult,
    *,
    title: str = "Project Timeline",
    current_date: date | None = None,
    group_by_level: bool = False,
) -> str:
    """Generate a Mermaid gantt chart from a schedule result.

    Args:
        result: The scheduling result
        title: Chart title
        current_date: Where to draw the today marker, if anywhere
        group_by_level: Put each dependency level in its own section

    Returns:
        Mermaid gantt chart syntax as a string
    """
    lines = [
        "gantt",
        f"    title {title}",
        "    dateFormat YYYY-MM-DD",
    ]
    if current_date is not None:
        lines.append(f"    todayMarker {current_date.strftime('%Y-%m-%d')}")
    lines.append("")

    if group_by_level:
        # result.tasks is already sorted by level
        for level, tasks in groupby(result.tasks, key=lambda task: task.level):
            lines.append(f"    section Level {level}")
            lines.extend(_mermaid_task_line(task) for task in tasks)
    else:
        lines.extend(_mermaid_task_line(task) for task in result.tasks)

    return "\n".join(lines)


def render_table(
    result: TimelineResult,
    *,
    today: date | None = None,
    show_connectors: bool = True,
) -> str:
    """Render the resolved schedule as a fixed-width text table."""
    header = (
        f"{'ID':<16} {'Title':<28} {'Status':<12} {'Start':<14} {'End':<14} "
        f"{'Days':>4} {'Prog':>4} {'Lvl':>3} {'Left%':>6} {'Width%':>6}"
    )
    lines = [header, "-" * len(header)]

    for task in result.tasks:
        bar = result.position(task)
        lines.append(
            f"{task.task_id[:16]:<16} {task.title[:28]:<28} {task.status.value:<12} "
            f"{format_day(task.start_date, today):<14} {format_day(task.end_date, today):<14} "
            f"{task.duration_days:>4} {task.progress_percent:>3}% {task.level:>3} "
            f"{bar.left_percent:>6.1f} {bar.width_percent:>6.1f}"
        )
        if show_connectors:
            for dep_id, connector in zip(
                (d for d in task.dependencies if result.get_task(d) is not None),
                result.connectors(task),
                strict=True,
            ):
                lines.append(
                    f"{'':<16}   <- {dep_id} "
                    f"({connector.left_percent:.1f}% .. {connector.right_percent:.1f}%)"
                )

    lines.append("")
    lines.append(
        f"Grid: {result.grid[0]} .. {result.grid[-1]} ({len(result.grid)} days), "
        f"project window {result.project_start} .. {result.project_end}"
    )
    return "\n".join(lines)
