"""Task records consumed by the dependency engine."""

from collections.abc import Iterable, Mapping
from datetime import UTC, date, datetime, time
from enum import StrEnum
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field, field_validator

log = structlog.get_logger()


class TaskStatus(StrEnum):
    """Task workflow states."""

    PENDING = "pending"  # Not started
    ACTIVE = "active"  # Work in progress
    BLOCKED = "blocked"  # Waiting on something
    COMPLETED = "completed"  # Done; satisfies dependents


# Spellings used by older dashboard records
_STATUS_ALIASES: dict[str, TaskStatus] = {
    "inprogress": TaskStatus.ACTIVE,
    "in_progress": TaskStatus.ACTIVE,
    "doing": TaskStatus.ACTIVE,
    "todo": TaskStatus.PENDING,
    "notstarted": TaskStatus.PENDING,
    "done": TaskStatus.COMPLETED,
}


def parse_task_date(value: Any) -> datetime | None:
    """Coerce a loosely typed date value into a naive datetime.

    Accepts ``datetime``, ``date`` and ISO-8601 strings. Aware datetimes are
    converted to UTC. Anything unparsable resolves to ``None``.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(UTC).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str):
        try:
            return parse_task_date(datetime.fromisoformat(value.strip()))
        except ValueError:
            log.debug("unparsable_task_date", value=value)
            return None
    log.debug("unsupported_task_date", value_type=type(value).__name__)
    return None


class Task(BaseModel):
    """A schedulable unit of work.

    Only ``id``, ``status``, the two dates and ``dependencies`` matter to the
    engine. Any other attribute is carried along untouched.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(..., description="Unique task identifier")
    name: str = Field(default="", description="Display label")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="Current status")
    start_date: datetime | None = Field(default=None, alias="startDate")
    due_date: datetime | None = Field(default=None, alias="dueDate")
    dependencies: list[str] = Field(
        default_factory=list, description="Ids of tasks this task depends on"
    )

    # Denormalized display fields set by flatten_projects()
    project_id: str | None = Field(default=None, alias="projectId")
    project_name: str | None = Field(default=None, alias="projectName")
    project_color: str | None = Field(default=None, alias="projectColor")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, value: Any) -> Any:
        if value is None:
            return TaskStatus.PENDING
        if isinstance(value, str):
            normalized = value.strip().lower()
            return _STATUS_ALIASES.get(normalized, normalized)
        return value

    @field_validator("start_date", "due_date", mode="before")
    @classmethod
    def normalize_date(cls, value: Any) -> datetime | None:
        return parse_task_date(value)

    @field_validator("dependencies", mode="before")
    @classmethod
    def normalize_dependencies(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return [str(dep_id) for dep_id in value]
        return value

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED


class Project(BaseModel):
    """A project grouping tasks on the dashboard."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    name: str = ""
    color: str | None = None
    tasks: list[Task] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("tasks", mode="before")
    @classmethod
    def normalize_tasks(cls, value: Any) -> Any:
        return [] if value is None else value


def load_tasks(records: Iterable[Task | Mapping[str, Any]]) -> list[Task]:
    """Build Task models from plain records.

    Args:
        records: Task instances or mappings (camelCase or snake_case keys).

    Returns:
        List of Task models in input order.
    """
    return [
        record if isinstance(record, Task) else Task.model_validate(record) for record in records
    ]


def index_tasks(tasks: Iterable[Task]) -> dict[str, Task]:
    """Map task ids to tasks; the first occurrence of a duplicated id wins."""
    index: dict[str, Task] = {}
    for task in tasks:
        index.setdefault(task.id, task)
    return index
