"""Dependency resolution: dependency levels and start-date pushes."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from datetime import timedelta

from ..logger import checks_enabled, get_logger
from .config import ResolutionMode
from .core import WorkItem

logger = get_logger()


@dataclass
class _Frame:
    """One task on the depth-first stack."""

    item: WorkItem
    visited: frozenset[str]  # Task ids on the path from the root, including this one
    next_dep: int = 0
    level: int = 0


class DependencyResolver:
    """Pushes tasks past their prerequisites and assigns dependency levels.

    The resolver works on WorkItems in place. It never raises: dependency ids
    that name no task are skipped, and a cycle only stops the branch that
    re-enters it. Both are reported through ``warnings``.
    """

    def __init__(self, items: list[WorkItem], *, buffer_days: int = 1):
        """Initialize the resolver.

        Args:
            items: Naively scheduled tasks in input order
            buffer_days: Days between a prerequisite's end and a dependent's start
        """
        self.items = items
        # On duplicate ids the later task wins, as for any id lookup
        self.item_map: dict[str, WorkItem] = {item.task_id: item for item in items}
        self.buffer = timedelta(days=buffer_days)
        self.warnings: list[str] = []
        self._acyclic: set[str] = set()
        self._settled: set[str] = set()

    def resolve(self, mode: ResolutionMode = ResolutionMode.INPUT_ORDER) -> list[WorkItem]:
        """Resolve all items and return them in input order."""
        ordered, blocked = self.topological_order()
        self._collect_warnings(blocked)
        if mode == ResolutionMode.TOPOLOGICAL:
            self._resolve_topological(ordered, blocked)
        else:
            self._acyclic = set(ordered)
            self._settled = set()
            for item in self.items:
                self._visit(item.task_id)
        return self.items

    def topological_order(self) -> tuple[list[str], list[str]]:
        """Order task ids so every task follows its known prerequisites.

        Returns:
            (ordered, blocked): ``blocked`` holds, in input order, the tasks that
            sit on a cycle or depend on one and therefore cannot be ordered
        """
        dependents: dict[str, list[str]] = {task_id: [] for task_id in self.item_map}
        in_degree = dict.fromkeys(self.item_map, 0)
        for task_id, item in self.item_map.items():
            for dep_id in item.dependencies:
                if dep_id in self.item_map:
                    dependents[dep_id].append(task_id)
                    in_degree[task_id] += 1

        queue = deque(task_id for task_id, degree in in_degree.items() if degree == 0)
        ordered: list[str] = []
        while queue:
            task_id = queue.popleft()
            ordered.append(task_id)
            for dependent_id in dependents[task_id]:
                in_degree[dependent_id] -= 1
                if in_degree[dependent_id] == 0:
                    queue.append(dependent_id)

        placed = set(ordered)
        blocked = [task_id for task_id in self.item_map if task_id not in placed]
        return ordered, blocked

    def _collect_warnings(self, blocked: list[str]) -> None:
        for item in self.items:
            for dep_id in item.dependencies:
                if dep_id not in self.item_map:
                    self.warnings.append(
                        f"Task '{item.task_id}' depends on unknown task '{dep_id}' (ignored)"
                    )
        if blocked:
            self.warnings.append(
                f"Dependency cycle involving or blocking: {', '.join(blocked)}"
            )

    def _push(self, item: WorkItem, dep: WorkItem) -> None:
        """Move item so it starts at least one buffer after dep ends."""
        earliest = dep.end_date + self.buffer
        if item.start_date < earliest:
            logger.changes(
                "%s: start %s -> %s (after %s ends %s)",
                item.task_id,
                item.start_date,
                earliest,
                dep.task_id,
                dep.end_date,
            )
            item.shift_start(earliest)

    def _open(self, task_id: str, visited: frozenset[str]) -> _Frame | None:
        if task_id in visited:
            if checks_enabled():
                logger.checks("  %s already on this branch, cycle edge contributes 0", task_id)
            return None
        return _Frame(item=self.item_map[task_id], visited=visited | {task_id})

    def _visit(self, root_id: str) -> int:
        """Depth-first level computation rooted at root_id.

        Each branch carries its own visited set, so a cycle cuts off only the
        path that re-enters it. A re-entered task counts as level 0 for its
        caller; the caller still compares dates against it.

        Visiting a task that neither sits on nor depends on a cycle always
        gives the same answer, so such tasks are only walked once.
        """
        if root_id in self._settled:
            return self.item_map[root_id].level

        stack = [_Frame(item=self.item_map[root_id], visited=frozenset({root_id}))]
        returned: int | None = None
        while stack:
            frame = stack[-1]
            if returned is not None:
                dep_id = frame.item.dependencies[frame.next_dep - 1]
                frame.level = max(frame.level, returned + 1)
                self._push(frame.item, self.item_map[dep_id])
                returned = None

            if frame.next_dep < len(frame.item.dependencies):
                dep_id = frame.item.dependencies[frame.next_dep]
                frame.next_dep += 1
                if dep_id not in self.item_map:
                    continue
                if dep_id in self._settled:
                    returned = self.item_map[dep_id].level
                    continue
                child = self._open(dep_id, frame.visited)
                if child is None:
                    returned = 0
                else:
                    stack.append(child)
                continue

            frame.item.level = frame.level
            stack.pop()
            if frame.item.task_id in self._acyclic:
                self._settled.add(frame.item.task_id)
            returned = frame.level

        return returned or 0

    def _resolve_topological(self, ordered: list[str], blocked: list[str]) -> None:
        done: set[str] = set()
        for task_id in ordered + blocked:
            item = self.item_map[task_id]
            level = 0
            for dep_id in item.dependencies:
                # Unknown ids and not-yet-placed cycle members contribute nothing
                if dep_id not in done:
                    continue
                dep = self.item_map[dep_id]
                level = max(level, dep.level + 1)
                self._push(item, dep)
            item.level = level
            done.add(task_id)


def resolve_dependencies(
    items: list[WorkItem],
    mode: ResolutionMode = ResolutionMode.INPUT_ORDER,
    *,
    buffer_days: int = 1,
) -> tuple[list[WorkItem], list[str]]:
    """Resolve items in place; return them with any warnings."""
    resolver = DependencyResolver(items, buffer_days=buffer_days)
    return resolver.resolve(mode), resolver.warnings
