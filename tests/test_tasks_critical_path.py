"""Tests for critical path scheduling and schedule offsets."""

from datetime import date, datetime

import pytest

from taskdag.config import engine_config
from taskdag.errors import DependencyCycleError, TaskDagError, ValidationError
from taskdag.tasks.critical_path import (
    CriticalPathResult,
    calculate_critical_path,
    offset_to_date,
    project_start_date,
    task_duration,
)


def details_by_id(result: CriticalPathResult) -> dict:
    return {info.id: info for info in result.task_details}


class TestTaskDuration:
    """Tests for task_duration."""

    def test_whole_days(self, make_timed_task) -> None:
        assert task_duration(make_timed_task("A", 5)) == 5

    def test_missing_dates_default_to_one_day(self, make_task) -> None:
        assert task_duration(make_task("A")) == 1
        assert task_duration(make_task("B", start_date="2024-01-01")) == 1
        assert task_duration(make_task("C", due_date="2024-01-01")) == 1

    def test_unparsable_dates_default_to_one_day(self, make_task) -> None:
        task = make_task("A", start_date="next week", due_date="2024-01-09")
        assert task.start_date is None
        assert task_duration(task) == 1

    def test_partial_days_round_up(self, make_task) -> None:
        task = make_task(
            "A",
            start_date=datetime(2024, 1, 1, 8, 0),
            due_date=datetime(2024, 1, 2, 20, 0),
        )
        assert task_duration(task) == 2

    def test_same_day_is_one_day(self, make_task) -> None:
        task = make_task("A", start_date="2024-01-01", due_date="2024-01-01")
        assert task_duration(task) == 1

    def test_reversed_dates_use_magnitude(self, make_task) -> None:
        task = make_task("A", start_date="2024-01-10", due_date="2024-01-07")
        assert task_duration(task) == 3

    def test_default_override(self, make_task) -> None:
        assert task_duration(make_task("A"), default_days=4) == 4

    def test_default_from_config(self, make_task, monkeypatch) -> None:
        monkeypatch.setattr(engine_config, "default_duration_days", 2)
        assert task_duration(make_task("A")) == 2


class TestCalculateCriticalPath:
    """Tests for calculate_critical_path."""

    def test_linear_chain(self, chain_tasks) -> None:
        """A(5) -> B(3) -> C(2): everything is critical."""
        result = calculate_critical_path(chain_tasks)
        details = details_by_id(result)

        assert details["A"].earliest_start == 0
        assert details["B"].earliest_start == 5
        assert details["C"].earliest_start == 8
        assert result.project_duration == 10
        assert [info.id for info in result.critical_path] == ["A", "B", "C"]
        assert all(info.slack == 0 for info in result.task_details)

    def test_branch_with_slack(self, branch_tasks) -> None:
        """The shorter branch B carries slack (5+4) - (5+2) = 2."""
        result = calculate_critical_path(branch_tasks)
        details = details_by_id(result)

        assert result.project_duration == 10
        assert details["D"].earliest_start == 9
        assert details["B"].latest_start == 7
        assert details["B"].slack == 2
        assert details["B"].is_critical is False
        assert [info.id for info in result.critical_path] == ["A", "C", "D"]

    def test_backward_pass_independent_of_input_order(self, branch_tasks) -> None:
        reordered = list(reversed(branch_tasks))
        result = calculate_critical_path(reordered)

        assert [info.id for info in result.task_details] == ["D", "C", "B", "A"]
        assert details_by_id(result)["B"].slack == 2
        assert {info.id for info in result.critical_path} == {"A", "C", "D"}

    def test_duration_at_least_longest_task(self, make_timed_task) -> None:
        tasks = [
            make_timed_task("A", 2),
            make_timed_task("B", 12),
            make_timed_task("C", 3, dependencies=["A"]),
        ]
        result = calculate_critical_path(tasks)
        assert result.project_duration >= max(info.duration for info in result.task_details)
        assert result.project_duration == 12

    def test_slack_never_negative(self, make_timed_task) -> None:
        tasks = [
            make_timed_task("A", 3),
            make_timed_task("B", 1),
            make_timed_task("C", 4, dependencies=["A"]),
            make_timed_task("D", 2, dependencies=["A", "B"]),
            make_timed_task("E", 6, dependencies=["B"]),
            make_timed_task("F", 1, dependencies=["C", "D", "E"]),
        ]
        result = calculate_critical_path(tasks)
        for info in result.task_details:
            assert info.latest_start >= info.earliest_start, info.id
            assert info.slack >= 0

    def test_undated_tasks_use_default_duration(self, make_task) -> None:
        tasks = [
            make_task("A"),
            make_task("B", dependencies=["A"]),
            make_task("C", dependencies=["B"]),
        ]
        result = calculate_critical_path(tasks)
        assert result.project_duration == 3
        assert [info.earliest_start for info in result.task_details] == [0, 1, 2]

    def test_dangling_dependency_ignored(self, make_timed_task) -> None:
        tasks = [make_timed_task("A", 4, dependencies=["ghost-id"])]
        result = calculate_critical_path(tasks)
        assert result.task_details[0].earliest_start == 0
        assert result.project_duration == 4

    def test_custom_tolerance(self, branch_tasks) -> None:
        result = calculate_critical_path(branch_tasks, tolerance=3)
        assert [info.id for info in result.critical_path] == ["A", "B", "C", "D"]

    def test_empty_set(self) -> None:
        result = calculate_critical_path([])
        assert result == CriticalPathResult(project_duration=0)

    def test_duplicate_ids_first_wins(self, make_timed_task) -> None:
        tasks = [make_timed_task("A", 2), make_timed_task("A", 9)]
        result = calculate_critical_path(tasks)
        assert len(result.task_details) == 1
        assert result.project_duration == 2

    def test_cycle_raises(self, cyclic_tasks) -> None:
        with pytest.raises(DependencyCycleError) as exc_info:
            calculate_critical_path(cyclic_tasks)

        error = exc_info.value
        assert isinstance(error, TaskDagError)
        assert set(error.cycle) == {"A", "B", "C"}
        assert error.details["cycle"] == error.cycle
        assert "Circular dependency" in error.message

    def test_long_chain(self, long_chain) -> None:
        """Every link of a deep chain is on the critical path."""
        result = calculate_critical_path(long_chain)
        details = details_by_id(result)

        assert result.project_duration == len(long_chain)
        assert len(result.critical_path) == len(long_chain)
        assert details["T0"].earliest_start == 0
        assert details["T1999"].earliest_start == 1999
        assert details["T1999"].latest_start == 1999

    def test_does_not_mutate_inputs(self, branch_tasks) -> None:
        snapshot = [task.model_dump() for task in branch_tasks]
        calculate_critical_path(branch_tasks)
        assert [task.model_dump() for task in branch_tasks] == snapshot


class TestScheduleOffsets:
    """Tests for converting schedule offsets to calendar dates."""

    def test_offset_to_date(self) -> None:
        assert offset_to_date(date(2024, 4, 1), 5) == datetime(2024, 4, 6)
        assert offset_to_date("2024-04-01", 0) == datetime(2024, 4, 1)

    def test_invalid_reference(self) -> None:
        with pytest.raises(ValidationError, match="Invalid reference date") as exc_info:
            offset_to_date("someday", 3)
        assert exc_info.value.details == {"reference": "someday"}

    def test_task_schedule_dates(self, branch_tasks) -> None:
        details = details_by_id(calculate_critical_path(branch_tasks))
        reference = project_start_date(branch_tasks)

        assert reference == datetime(2024, 4, 1)
        assert details["D"].earliest_start_on(reference) == datetime(2024, 4, 10)
        assert details["B"].latest_start_on(reference) == datetime(2024, 4, 8)
        assert details["B"].earliest_finish == 7
        assert details["B"].latest_finish == 9

    def test_project_start_date_without_dates(self, make_task) -> None:
        assert project_start_date([make_task("A")]) is None
