"""
taskdag: Task dependency graph engine.

This package provides:
- Task records with lenient date/status normalization
- Cycle detection and dependency validation
- Blocking resolution and dependency statistics
- Topological ordering
- Critical path (CPM) scheduling with calendar conversion
- Gantt geometry for task bars and dependency arrows
"""

from taskdag._version import __version__, get_version
from taskdag.config import EngineConfig, engine_config
from taskdag.errors import (
    DependencyCycleError,
    TaskDagError,
    ValidationError,
)
from taskdag.models import Project, Task, TaskStatus, load_tasks
from taskdag.tasks import (
    CriticalPathResult,
    StartCheck,
    TaskSchedule,
    ValidationResult,
    calculate_critical_path,
    can_start_task,
    has_cycle,
    topological_sort,
    validate_dependencies,
)

__all__ = [
    # Results
    "CriticalPathResult",
    # Errors
    "DependencyCycleError",
    # Config
    "EngineConfig",
    # Models
    "Project",
    "StartCheck",
    "Task",
    "TaskDagError",
    "TaskSchedule",
    "TaskStatus",
    "ValidationError",
    "ValidationResult",
    # Version
    "__version__",
    # Engine
    "calculate_critical_path",
    "can_start_task",
    "engine_config",
    "get_version",
    "has_cycle",
    "load_tasks",
    "topological_sort",
    "validate_dependencies",
]
