"""Dependency graph engine: validation, blocking, ordering and scheduling."""

from taskdag.tasks.critical_path import (
    CriticalPathResult,
    ScheduleOffset,
    TaskSchedule,
    calculate_critical_path,
    offset_to_date,
    project_start_date,
    task_duration,
)
from taskdag.tasks.dependencies import (
    DependencyStats,
    StartCheck,
    ValidationResult,
    calculate_dependency_stats,
    calculate_recommended_start_date,
    can_start_task,
    find_cycle,
    get_dependency_tasks,
    get_dependent_tasks,
    has_cycle,
    topological_sort,
    validate_dependencies,
)
from taskdag.tasks.graph import (
    DependencyGraph,
    GraphEdge,
    GraphNode,
    build_dependency_graph,
    flatten_projects,
)

__all__ = [
    # Critical path
    "CriticalPathResult",
    # Graph
    "DependencyGraph",
    # Dependencies
    "DependencyStats",
    "GraphEdge",
    "GraphNode",
    "ScheduleOffset",
    "StartCheck",
    "TaskSchedule",
    "ValidationResult",
    "build_dependency_graph",
    "calculate_critical_path",
    "calculate_dependency_stats",
    "calculate_recommended_start_date",
    "can_start_task",
    "find_cycle",
    "flatten_projects",
    "get_dependency_tasks",
    "get_dependent_tasks",
    "has_cycle",
    "offset_to_date",
    "project_start_date",
    "task_duration",
    "topological_sort",
    "validate_dependencies",
]
