"""Task dependency validation, blocking and ordering.

Pure domain logic over an in-memory task snapshot. Nothing here performs
I/O or mutates the tasks it is given; callers re-invoke after every edit.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, timedelta

import structlog

from taskdag.models.tasks import Task, TaskStatus, index_tasks

log = structlog.get_logger()


@dataclass
class ValidationResult:
    """Outcome of validating one task's declared dependencies."""

    valid: bool
    errors: list[str] = field(default_factory=list)  # Blocking problems
    warnings: list[str] = field(default_factory=list)  # Advisories only


@dataclass
class StartCheck:
    """Whether a task can start, and what holds it back."""

    can_start: bool
    blocked_by: list[Task] = field(default_factory=list)  # Incomplete dependencies


@dataclass
class DependencyStats:
    """Aggregate dependency figures over a task set."""

    total_tasks: int
    tasks_with_dependencies: int
    total_dependencies: int
    blocked_tasks: int
    average_dependencies: float


def _label(task: Task) -> str:
    return task.name or task.id


# =============================================================================
# Cycle Detection
# =============================================================================


def _reaches_cycle(
    target_id: str,
    start: Task,
    index: dict[str, Task],
    visited: frozenset[str],
) -> bool:
    """DFS from ``start`` looking for ``target_id`` or a node already on the branch."""
    if start.id == target_id or start.id in visited:
        return True

    explored: set[str] = set()
    branch: set[str] = set(visited) | {start.id}
    stack = [(start, iter(start.dependencies))]

    while stack:
        node, dep_ids = stack[-1]
        for dep_id in dep_ids:
            next_task = index.get(dep_id)
            if next_task is None:
                continue
            if next_task.id == target_id or next_task.id in branch:
                return True
            if next_task.id in explored:
                continue
            branch.add(next_task.id)
            stack.append((next_task, iter(next_task.dependencies)))
            break
        else:
            # Nothing reachable from here closes a cycle
            stack.pop()
            branch.discard(node.id)
            explored.add(node.id)

    return False


def has_cycle(
    task: Task,
    candidate: Task,
    all_tasks: Sequence[Task],
    visited: frozenset[str] = frozenset(),
) -> bool:
    """Check whether depending on ``candidate`` closes a cycle through ``task``.

    Walks ``candidate``'s dependency chain. Reaching ``task`` again, or any
    node already on the current branch, counts as a cycle.

    Args:
        task: The task that would depend on ``candidate``
        candidate: The prospective (or existing) dependency
        all_tasks: Full task set used to resolve dependency ids
        visited: Ids already on the branch leading to ``candidate``

    Returns:
        True if a cycle is found
    """
    return _reaches_cycle(task.id, candidate, index_tasks(all_tasks), frozenset(visited))


def find_cycle(tasks: Sequence[Task]) -> list[str] | None:
    """Find one dependency cycle in a task set.

    Returns:
        Cycle as a list of ids whose first and last entries coincide,
        or None when the set is acyclic
    """
    index = index_tasks(tasks)
    visited: set[str] = set()

    for root_id in index:
        if root_id in visited:
            continue
        visited.add(root_id)
        path = [root_id]
        rec_stack = {root_id}
        stack = [iter(index[root_id].dependencies)]

        while stack:
            for neighbor in stack[-1]:
                if neighbor not in index:
                    continue
                if neighbor in rec_stack:
                    cycle_start = path.index(neighbor)
                    return [*path[cycle_start:], neighbor]
                if neighbor not in visited:
                    visited.add(neighbor)
                    rec_stack.add(neighbor)
                    path.append(neighbor)
                    stack.append(iter(index[neighbor].dependencies))
                    break
            else:
                stack.pop()
                rec_stack.discard(path.pop())

    return None


# =============================================================================
# Validation and Blocking
# =============================================================================


def validate_dependencies(task: Task, all_tasks: Sequence[Task]) -> ValidationResult:
    """Validate a task's dependencies against the full task set.

    Missing ids and cycles are errors. An unfinished dependency on an active
    task, or a start date before a dependency's due date, are warnings.

    Args:
        task: Task whose dependencies are checked
        all_tasks: Full task set

    Returns:
        ValidationResult; ``valid`` is True iff there are no errors
    """
    if not task.dependencies:
        return ValidationResult(valid=True)

    index = index_tasks(all_tasks)
    errors: list[str] = []
    warnings: list[str] = []

    for dep_id in task.dependencies:
        dep_task = index.get(dep_id)
        if dep_task is None:
            errors.append(f"Dependency task ID:{dep_id} not found")
            continue

        if _reaches_cycle(task.id, dep_task, index, frozenset()):
            errors.append(f'Circular dependency detected with task "{_label(dep_task)}"')

        if not dep_task.is_completed and task.status == TaskStatus.ACTIVE:
            warnings.append(f'Dependency task "{_label(dep_task)}" is not completed yet')

        if task.start_date and dep_task.due_date and task.start_date < dep_task.due_date:
            warnings.append(
                f'Scheduled to start before dependency task "{_label(dep_task)}" is due'
            )

    log.debug(
        "dependencies_validated",
        task_id=task.id,
        errors=len(errors),
        warnings=len(warnings),
    )
    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)


def can_start_task(task: Task, all_tasks: Sequence[Task]) -> StartCheck:
    """Check whether every resolvable dependency of a task is completed.

    Unresolved dependency ids do not block.
    """
    if not task.dependencies:
        return StartCheck(can_start=True)

    index = index_tasks(all_tasks)
    blocked_by = [
        dep_task
        for dep_id in task.dependencies
        if (dep_task := index.get(dep_id)) is not None and not dep_task.is_completed
    ]
    return StartCheck(can_start=not blocked_by, blocked_by=blocked_by)


def get_dependency_tasks(task: Task, all_tasks: Sequence[Task]) -> list[Task]:
    """Resolve the tasks this task depends on, dropping dangling ids."""
    if not task.dependencies:
        return []
    index = index_tasks(all_tasks)
    return [index[dep_id] for dep_id in task.dependencies if dep_id in index]


def get_dependent_tasks(task_id: str, all_tasks: Sequence[Task]) -> list[Task]:
    """Find the tasks that list ``task_id`` among their dependencies."""
    return [task for task in all_tasks if task_id in task.dependencies]


def calculate_recommended_start_date(task: Task, all_tasks: Sequence[Task]) -> date | None:
    """Suggest a start date: the day after the latest dependency due date.

    Returns:
        The suggested date, or None without dated dependencies
    """
    due_dates = [
        dep_task.due_date
        for dep_task in get_dependency_tasks(task, all_tasks)
        if dep_task.due_date is not None
    ]
    if not due_dates:
        return None
    return max(due_dates).date() + timedelta(days=1)


def calculate_dependency_stats(tasks: Sequence[Task]) -> DependencyStats:
    """Count dependencies and blocked tasks across a task set."""
    tasks_with_dependencies = 0
    total_dependencies = 0
    blocked_tasks = 0

    for task in tasks:
        if not task.dependencies:
            continue
        tasks_with_dependencies += 1
        total_dependencies += len(task.dependencies)
        if not can_start_task(task, tasks).can_start:
            blocked_tasks += 1

    average = (
        round(total_dependencies / tasks_with_dependencies, 1) if tasks_with_dependencies else 0.0
    )
    return DependencyStats(
        total_tasks=len(tasks),
        tasks_with_dependencies=tasks_with_dependencies,
        total_dependencies=total_dependencies,
        blocked_tasks=blocked_tasks,
        average_dependencies=average,
    )


# =============================================================================
# Ordering
# =============================================================================


def topological_sort(tasks: Sequence[Task]) -> list[Task]:
    """Order tasks so every task follows its dependencies.

    Depth-first with temporary and permanent marks. Dangling dependency ids
    are ignored. If a cycle is met the input order is returned unchanged,
    so callers must not assume sortedness for cyclic sets.

    Args:
        tasks: Task set to order

    Returns:
        New list in dependency order, or a copy of the input on cycle
    """
    index = index_tasks(tasks)
    ordered: list[Task] = []
    permanent: set[str] = set()
    temporary: set[str] = set()

    for root in tasks:
        if root.id in permanent:
            continue
        temporary.add(root.id)
        stack = [(root.id, iter(index[root.id].dependencies))]

        while stack:
            task_id, dep_ids = stack[-1]
            for dep_id in dep_ids:
                if dep_id in temporary:
                    log.debug("topological_sort_cycle", tasks=len(tasks))
                    return list(tasks)
                if dep_id in permanent:
                    continue
                dep_task = index.get(dep_id)
                if dep_task is None:
                    permanent.add(dep_id)
                    continue
                temporary.add(dep_id)
                stack.append((dep_id, iter(dep_task.dependencies)))
                break
            else:
                stack.pop()
                temporary.discard(task_id)
                permanent.add(task_id)
                ordered.append(index[task_id])

    return ordered
