"""Gantt chart geometry helpers."""

from taskdag.gantt.geometry import (
    DependencyArrow,
    TaskBarPosition,
    build_dependency_arrows,
    calculate_dependency_arrow,
    calculate_task_position,
)

__all__ = [
    "DependencyArrow",
    "TaskBarPosition",
    "build_dependency_arrows",
    "calculate_dependency_arrow",
    "calculate_task_position",
]
