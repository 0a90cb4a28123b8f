"""Tests for dependency resolution."""

import io
from datetime import date, timedelta
from itertools import permutations

import pytest

from ganttline.logger import VERBOSITY_CHANGES, setup_logger
from ganttline.models import Priority, Task
from ganttline.scheduler import (
    DependencyResolver,
    ResolutionMode,
    WorkItem,
    build_naive,
    resolve_dependencies,
)
from tests.conftest import make_task

BOTH_MODES = [ResolutionMode.INPUT_ORDER, ResolutionMode.TOPOLOGICAL]


def naive_items(*tasks: Task) -> list[WorkItem]:
    """Build naive WorkItems the way the service does."""
    items: list[WorkItem] = []
    for task in tasks:
        start, end = build_naive(task)
        items.append(
            WorkItem(task=task, start_date=start, end_date=end, duration_days=(end - start).days)
        )
    return items


def by_id(items: list[WorkItem]) -> dict[str, WorkItem]:
    return {item.task_id: item for item in items}


@pytest.mark.parametrize("mode", BOTH_MODES)
class TestSimpleChain:
    """A urgent/due 2024-01-10, B high/created 2024-01-01 depending on A."""

    def test_chain_dates_and_levels(self, mode: ResolutionMode) -> None:
        """Test that B is pushed to the day after A ends."""
        task_a = make_task("a", priority=Priority.URGENT, due_date=date(2024, 1, 10))
        task_b = make_task("b", priority=Priority.HIGH, created_at=date(2024, 1, 1), deps=["a"])

        items, warnings = resolve_dependencies(naive_items(task_a, task_b), mode)
        result = by_id(items)

        assert result["a"].duration_days == 1
        assert result["a"].start_date == date(2024, 1, 9)
        assert result["a"].end_date == date(2024, 1, 10)
        assert result["a"].level == 0

        assert result["b"].duration_days == 3
        assert result["b"].start_date == date(2024, 1, 11)
        assert result["b"].end_date == date(2024, 1, 14)
        assert result["b"].level == 1
        assert warnings == []

    def test_dependent_listed_first(self, mode: ResolutionMode) -> None:
        """Test that listing the dependent before its prerequisite changes nothing."""
        task_a = make_task("a", priority=Priority.URGENT, due_date=date(2024, 1, 10))
        task_b = make_task("b", priority=Priority.HIGH, deps=["a"])

        items, _ = resolve_dependencies(naive_items(task_b, task_a), mode)
        result = by_id(items)

        assert result["b"].start_date == date(2024, 1, 11)
        assert result["b"].level == 1

    def test_no_push_when_already_later(self, mode: ResolutionMode) -> None:
        """Test that a dependent already starting after the buffer keeps its dates."""
        task_a = make_task("a", priority=Priority.URGENT, due_date=date(2024, 1, 10))
        task_b = make_task("b", priority=Priority.HIGH, created_at=date(2024, 2, 1), deps=["a"])

        items, _ = resolve_dependencies(naive_items(task_a, task_b), mode)

        assert by_id(items)["b"].start_date == date(2024, 2, 1)
        assert by_id(items)["b"].level == 1


class TestBuffer:
    """Test the gap between a prerequisite and its dependent."""

    def test_start_on_prerequisite_end_is_pushed(self) -> None:
        """Test that starting on the very day the prerequisite ends is not enough."""
        task_a = make_task("a", priority=Priority.URGENT, due_date=date(2024, 1, 10))
        task_b = make_task("b", priority=Priority.HIGH, created_at=date(2024, 1, 10), deps=["a"])

        items, _ = resolve_dependencies(naive_items(task_a, task_b))

        assert by_id(items)["b"].start_date == date(2024, 1, 11)

    def test_custom_buffer(self) -> None:
        """Test a wider buffer."""
        task_a = make_task("a", priority=Priority.URGENT, due_date=date(2024, 1, 10))
        task_b = make_task("b", priority=Priority.HIGH, deps=["a"])

        items, _ = resolve_dependencies(naive_items(task_a, task_b), buffer_days=3)

        assert by_id(items)["b"].start_date == date(2024, 1, 13)
        assert by_id(items)["b"].end_date == date(2024, 1, 16)


@pytest.mark.parametrize("mode", BOTH_MODES)
class TestDanglingDependency:
    """Test dependencies on ids that are not in the project."""

    def test_dangling_is_ignored(self, mode: ResolutionMode) -> None:
        """Test that a task depending on a ghost keeps its naive schedule and level 0."""
        task_c = make_task("c", priority=Priority.MEDIUM, deps=["ghost"])
        naive = build_naive(task_c)

        items, warnings = resolve_dependencies(naive_items(task_c), mode)

        assert (items[0].start_date, items[0].end_date) == naive
        assert items[0].level == 0
        assert any("ghost" in warning for warning in warnings)

    def test_dangling_next_to_real_dependency(self, mode: ResolutionMode) -> None:
        """Test that a ghost alongside a real prerequisite does not add a level."""
        task_a = make_task("a", priority=Priority.URGENT, due_date=date(2024, 1, 10))
        task_c = make_task("c", deps=["ghost", "a"])

        items, _ = resolve_dependencies(naive_items(task_a, task_c), mode)

        assert by_id(items)["c"].level == 1
        assert by_id(items)["c"].start_date == date(2024, 1, 11)


class TestCycles:
    """Test that cycles terminate and leave valid schedules."""

    @pytest.mark.parametrize("mode", BOTH_MODES)
    def test_two_cycle_terminates(self, mode: ResolutionMode) -> None:
        """Test A <-> B produces finite dates and levels for both."""
        task_a = make_task("a", deps=["b"])
        task_b = make_task("b", deps=["a"])

        items, warnings = resolve_dependencies(naive_items(task_a, task_b), mode)

        for item in items:
            assert item.level >= 0
            assert item.end_date - item.start_date == timedelta(days=7)
            assert item.start_date >= date(2024, 1, 1)
        assert any("cycle" in warning for warning in warnings)

    def test_two_cycle_input_order_values(self) -> None:
        """Test the exact input-order outcome for A <-> B (both medium, created 2024-01-01)."""
        task_a = make_task("a", deps=["b"])
        task_b = make_task("b", deps=["a"])

        items, _ = resolve_dependencies(naive_items(task_a, task_b))
        result = by_id(items)

        assert result["a"].level == 1
        assert result["a"].start_date == date(2024, 1, 17)
        assert result["b"].level == 2
        assert result["b"].start_date == date(2024, 1, 25)

    def test_two_cycle_topological_values(self) -> None:
        """Test that topological mode cuts the cycle at the first task in input order."""
        task_a = make_task("a", deps=["b"])
        task_b = make_task("b", deps=["a"])

        items, _ = resolve_dependencies(naive_items(task_a, task_b), ResolutionMode.TOPOLOGICAL)
        result = by_id(items)

        assert result["a"].level == 0
        assert result["a"].start_date == date(2024, 1, 1)
        assert result["b"].level == 1
        assert result["b"].start_date == date(2024, 1, 9)

    @pytest.mark.parametrize("mode", BOTH_MODES)
    def test_self_dependency_terminates(self, mode: ResolutionMode) -> None:
        """Test that a task depending on itself does not loop."""
        task = make_task("a", deps=["a"])

        items, _ = resolve_dependencies(naive_items(task), mode)

        assert items[0].duration_days == 7
        assert items[0].level <= 1

    @pytest.mark.parametrize("mode", BOTH_MODES)
    def test_three_cycle_with_tail(self, mode: ResolutionMode) -> None:
        """Test a cycle a -> b -> c -> a with a task d hanging off it."""
        tasks = [
            make_task("a", deps=["c"]),
            make_task("b", deps=["a"]),
            make_task("c", deps=["b"]),
            make_task("d", deps=["c"]),
        ]

        items, warnings = resolve_dependencies(naive_items(*tasks), mode)

        assert len(items) == 4
        for item in items:
            assert item.end_date > item.start_date
        assert "d" in warnings[-1]


class TestOrdering:
    """Test order (in)dependence of the two modes."""

    def diamond(self) -> list[Task]:
        """top -> (left, right) -> bottom, with uneven branch lengths."""
        return [
            make_task("top", priority=Priority.HIGH, created_at=date(2024, 1, 1)),
            make_task("left", priority=Priority.URGENT, deps=["top"]),
            make_task("right", priority=Priority.LOW, deps=["top"]),
            make_task("bottom", priority=Priority.MEDIUM, deps=["left", "right"]),
        ]

    def summary(self, items: list[WorkItem]) -> dict[str, tuple[date, date, int]]:
        return {item.task_id: (item.start_date, item.end_date, item.level) for item in items}

    def test_diamond_values(self) -> None:
        """Test the diamond against hand-computed dates."""
        items, _ = resolve_dependencies(naive_items(*self.diamond()))
        result = self.summary(items)

        assert result["top"] == (date(2024, 1, 1), date(2024, 1, 4), 0)
        assert result["left"] == (date(2024, 1, 5), date(2024, 1, 6), 1)
        assert result["right"] == (date(2024, 1, 5), date(2024, 1, 19), 1)
        assert result["bottom"] == (date(2024, 1, 20), date(2024, 1, 27), 2)

    def test_modes_agree_on_acyclic_graphs(self) -> None:
        """Test that both modes give the same schedule for every input order of the diamond."""
        expected = self.summary(resolve_dependencies(naive_items(*self.diamond()))[0])
        for order in permutations(self.diamond()):
            for mode in BOTH_MODES:
                items, _ = resolve_dependencies(naive_items(*order), mode)
                assert self.summary(items) == expected

    def test_level_is_longest_chain(self) -> None:
        """Test that a shortcut edge does not lower the level."""
        tasks = [
            make_task("a"),
            make_task("b", deps=["a"]),
            make_task("c", deps=["b"]),
            make_task("d", deps=["a", "c"]),
        ]
        items, _ = resolve_dependencies(naive_items(*tasks))
        assert by_id(items)["d"].level == 3

    def test_deep_chain_does_not_hit_recursion_limit(self) -> None:
        """Test a chain longer than Python's default recursion limit."""
        length = 1500
        tasks = [make_task("t0", priority=Priority.URGENT)]
        tasks += [
            make_task(f"t{i}", priority=Priority.URGENT, deps=[f"t{i - 1}"])
            for i in range(1, length)
        ]
        items, _ = resolve_dependencies(naive_items(*reversed(tasks)))
        result = by_id(items)

        last = result[f"t{length - 1}"]
        assert last.level == length - 1
        # Each link is one day of work plus one day of buffer
        assert last.start_date == date(2024, 1, 1) + timedelta(days=2 * (length - 1))


class TestResolverLogging:
    """Test that date pushes are logged at changes verbosity."""

    def test_push_logged(self) -> None:
        """Test the changes-level message for a pushed task."""
        stream = io.StringIO()
        setup_logger(VERBOSITY_CHANGES, stream)
        task_a = make_task("a", priority=Priority.URGENT, due_date=date(2024, 1, 10))
        task_b = make_task("b", priority=Priority.HIGH, deps=["a"])

        DependencyResolver(naive_items(task_a, task_b)).resolve()

        assert "b: start 2024-01-01 -> 2024-01-11 (after a ends 2024-01-10)" in stream.getvalue()

    def test_silent_by_default(self) -> None:
        """Test that nothing is logged at verbosity 0."""
        stream = io.StringIO()
        setup_logger(0, stream)
        task_a = make_task("a", priority=Priority.URGENT, due_date=date(2024, 1, 10))
        task_b = make_task("b", priority=Priority.HIGH, deps=["a", "ghost"])

        DependencyResolver(naive_items(task_a, task_b)).resolve()

        assert stream.getvalue() == ""


class TestTopologicalOrder:
    """Test the ordering helper."""

    def test_orders_prerequisites_first(self) -> None:
        """Test that every task comes after its prerequisites."""
        tasks = [make_task("c", deps=["b"]), make_task("b", deps=["a"]), make_task("a")]
        ordered, blocked = DependencyResolver(naive_items(*tasks)).topological_order()
        assert ordered == ["a", "b", "c"]
        assert blocked == []

    def test_cycle_members_blocked(self) -> None:
        """Test that tasks on or behind a cycle are reported as blocked."""
        tasks = [
            make_task("free"),
            make_task("x", deps=["y"]),
            make_task("y", deps=["x"]),
            make_task("behind", deps=["y", "free"]),
        ]
        ordered, blocked = DependencyResolver(naive_items(*tasks)).topological_order()
        assert ordered == ["free"]
        assert blocked == ["x", "y", "behind"]
