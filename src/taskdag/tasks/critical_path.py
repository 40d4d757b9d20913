"""Critical path analysis over the task dependency DAG.

All schedule figures are ``ScheduleOffset`` values: whole days counted from
an implicit project start of 0. Use ``offset_to_date`` (or the
``TaskSchedule.*_on`` helpers) to place them on a calendar.
"""

import math
from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import TypeAlias

import structlog

from taskdag.config import engine_config
from taskdag.errors import DependencyCycleError, ValidationError
from taskdag.models.tasks import Task, index_tasks, parse_task_date
from taskdag.tasks.dependencies import find_cycle

log = structlog.get_logger()

ScheduleOffset: TypeAlias = int

SECONDS_PER_DAY = 24 * 60 * 60


def task_duration(task: Task, default_days: int | None = None) -> int:
    """Duration of a task in whole days.

    ``ceil(|due - start|)`` with a floor of one day. Tasks missing either
    date fall back to ``default_days`` (``engine_config.default_duration_days``
    when not given).
    """
    if task.start_date is None or task.due_date is None:
        return default_days if default_days is not None else engine_config.default_duration_days

    seconds = abs((task.due_date - task.start_date).total_seconds())
    return max(math.ceil(seconds / SECONDS_PER_DAY), 1)


def offset_to_date(reference: date | datetime | str, offset: ScheduleOffset) -> datetime:
    """Convert a schedule offset to a calendar datetime.

    Args:
        reference: Calendar date that offset 0 maps to
        offset: Day count from the project start

    Raises:
        ValidationError: If the reference cannot be read as a date
    """
    start = parse_task_date(reference)
    if start is None:
        raise ValidationError(
            f"Invalid reference date: {reference!r}",
            details={"reference": str(reference)},
        )
    return start + timedelta(days=offset)


def project_start_date(tasks: Sequence[Task]) -> datetime | None:
    """Earliest start date in the set, a natural reference for offset 0."""
    return min((task.start_date for task in tasks if task.start_date is not None), default=None)


@dataclass
class TaskSchedule:
    """CPM figures for one task."""

    task: Task
    duration: int
    earliest_start: ScheduleOffset = 0
    latest_start: ScheduleOffset = 0
    slack: ScheduleOffset = 0
    is_critical: bool = False

    @property
    def id(self) -> str:
        return self.task.id

    @property
    def name(self) -> str:
        return self.task.name

    @property
    def earliest_finish(self) -> ScheduleOffset:
        return self.earliest_start + self.duration

    @property
    def latest_finish(self) -> ScheduleOffset:
        return self.latest_start + self.duration

    def earliest_start_on(self, reference: date | datetime | str) -> datetime:
        return offset_to_date(reference, self.earliest_start)

    def latest_start_on(self, reference: date | datetime | str) -> datetime:
        return offset_to_date(reference, self.latest_start)


@dataclass
class CriticalPathResult:
    """Result of critical path analysis."""

    project_duration: ScheduleOffset
    critical_path: list[TaskSchedule] = field(default_factory=list)
    task_details: list[TaskSchedule] = field(default_factory=list)


def _dependency_order(index: dict[str, Task], dependents: dict[str, list[str]]) -> list[str]:
    """Kahn's algorithm over resolved dependencies; the graph must be acyclic."""
    in_degree = {
        task_id: sum(1 for dep_id in task.dependencies if dep_id in index)
        for task_id, task in index.items()
    }
    queue = deque(task_id for task_id, degree in in_degree.items() if degree == 0)
    ordered: list[str] = []

    while queue:
        task_id = queue.popleft()
        ordered.append(task_id)
        for successor_id in dependents[task_id]:
            in_degree[successor_id] -= 1
            if in_degree[successor_id] == 0:
                queue.append(successor_id)

    return ordered


def calculate_critical_path(
    tasks: Sequence[Task],
    *,
    tolerance: float | None = None,
) -> CriticalPathResult:
    """Compute earliest/latest starts, slack and the critical path.

    Forward pass: a task starts once all resolved dependencies finish.
    Backward pass: a task must start early enough for its tightest dependent.
    Tasks whose slack is within ``tolerance`` of zero form the critical path.
    Results follow input order; dangling dependency ids are ignored.

    Args:
        tasks: Task set to schedule
        tolerance: Slack tolerance (``engine_config.critical_slack_tolerance``
            when not given)

    Returns:
        CriticalPathResult with per-task details

    Raises:
        DependencyCycleError: If the dependency graph contains a cycle
    """
    tolerance = engine_config.critical_slack_tolerance if tolerance is None else tolerance

    cycle = find_cycle(tasks)
    if cycle:
        log.warning("critical_path_cycle_detected", cycle=cycle)
        raise DependencyCycleError(cycle)

    index = index_tasks(tasks)
    details = {
        task_id: TaskSchedule(task=task, duration=task_duration(task))
        for task_id, task in index.items()
    }
    dependents: dict[str, list[str]] = {task_id: [] for task_id in index}
    for task in index.values():
        for dep_id in task.dependencies:
            if dep_id in dependents:
                dependents[dep_id].append(task.id)

    order = _dependency_order(index, dependents)

    # Forward pass (earliest start), predecessors first
    for task_id in order:
        info = details[task_id]
        info.earliest_start = max(
            (
                details[dep_id].earliest_finish
                for dep_id in info.task.dependencies
                if dep_id in details
            ),
            default=0,
        )

    project_duration = max((info.earliest_finish for info in details.values()), default=0)

    # Backward pass (latest start), dependents before their predecessors
    for task_id in reversed(order):
        info = details[task_id]
        successors = dependents[task_id]
        if not successors:
            info.latest_start = project_duration - info.duration
        else:
            info.latest_start = (
                min(details[successor_id].latest_start for successor_id in successors)
                - info.duration
            )
        info.slack = info.latest_start - info.earliest_start
        info.is_critical = abs(info.slack) < tolerance

    task_details = list(details.values())
    critical_path = [info for info in task_details if info.is_critical]

    log.debug(
        "critical_path_complete",
        tasks=len(task_details),
        project_duration=project_duration,
        critical=len(critical_path),
    )
    return CriticalPathResult(
        project_duration=project_duration,
        critical_path=critical_path,
        task_details=task_details,
    )
