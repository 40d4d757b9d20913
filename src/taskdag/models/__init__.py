"""Input models for the dependency engine."""

from taskdag.models.tasks import (
    Project,
    Task,
    TaskStatus,
    index_tasks,
    load_tasks,
    parse_task_date,
)

__all__ = [
    "Project",
    "Task",
    "TaskStatus",
    "index_tasks",
    "load_tasks",
    "parse_task_date",
]
