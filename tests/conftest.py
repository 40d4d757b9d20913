"""Pytest fixtures and factories for taskdag tests.

Usage:
    def test_something(make_task):
        task = make_task("a", status=TaskStatus.ACTIVE, dependencies=["b"])
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any

import pytest

from taskdag.models.tasks import Task, TaskStatus

BASE_DATE = datetime(2024, 4, 1)


def build_task(
    task_id: str,
    *,
    name: str | None = None,
    status: TaskStatus = TaskStatus.PENDING,
    dependencies: list[str] | None = None,
    **kwargs: Any,
) -> Task:
    """Factory for creating test tasks."""
    return Task(
        id=task_id,
        name=name if name is not None else f"Task {task_id}",
        status=status,
        dependencies=dependencies or [],
        **kwargs,
    )


def build_timed_task(
    task_id: str,
    duration: int,
    *,
    offset: int = 0,
    dependencies: list[str] | None = None,
    **kwargs: Any,
) -> Task:
    """Factory for tasks spanning ``duration`` days starting ``offset`` days after BASE_DATE."""
    start = BASE_DATE + timedelta(days=offset)
    return build_task(
        task_id,
        dependencies=dependencies,
        start_date=start,
        due_date=start + timedelta(days=duration),
        **kwargs,
    )


@pytest.fixture
def make_task() -> Callable[..., Task]:
    return build_task


@pytest.fixture
def make_timed_task() -> Callable[..., Task]:
    return build_timed_task


@pytest.fixture
def chain_tasks() -> list[Task]:
    """A(5) <- B(3) <- C(2)."""
    return [
        build_timed_task("A", 5),
        build_timed_task("B", 3, offset=5, dependencies=["A"]),
        build_timed_task("C", 2, offset=8, dependencies=["B"]),
    ]


@pytest.fixture
def branch_tasks() -> list[Task]:
    """A(5) fans out to B(2) and C(4), which join at D(1)."""
    return [
        build_timed_task("A", 5),
        build_timed_task("B", 2, offset=5, dependencies=["A"]),
        build_timed_task("C", 4, offset=5, dependencies=["A"]),
        build_timed_task("D", 1, offset=9, dependencies=["B", "C"]),
    ]


@pytest.fixture
def cyclic_tasks() -> list[Task]:
    """A -> B -> C -> A, plus an independent task D."""
    return [
        build_task("A", dependencies=["C"]),
        build_task("B", dependencies=["A"]),
        build_task("C", dependencies=["B"]),
        build_task("D"),
    ]


LONG_CHAIN_LENGTH = 2000


@pytest.fixture
def long_chain() -> list[Task]:
    """T0 <- T1 <- ... <- T1999, listed last task first."""
    tasks = [
        build_task(f"T{i}", dependencies=[f"T{i - 1}"] if i else [])
        for i in range(LONG_CHAIN_LENGTH)
    ]
    return tasks[::-1]
