"""Gantt chart geometry for task bars and dependency arrows.

Coordinates are linear in time across a calendar window: ``0`` at the
window start, ``chart_width`` at its end. Rows are ``row_height`` tall and
arrows attach to their vertical centre.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, datetime

import structlog

from taskdag.config import engine_config
from taskdag.errors import ValidationError
from taskdag.models.tasks import Task, parse_task_date

log = structlog.get_logger()

ARROWHEAD_LENGTH = 6.0
ARROWHEAD_HALF_HEIGHT = 4.0

DateLike = date | datetime | str


@dataclass
class TaskBarPosition:
    """Horizontal placement of a task bar."""

    left: float
    width: float
    is_out_of_range: bool


@dataclass
class DependencyArrow:
    """Elbow connector from a predecessor's end to a dependent's start."""

    key: str
    path: str  # SVG path data
    from_x: float
    from_y: float
    to_x: float
    to_y: float
    arrowhead: list[tuple[float, float]] = field(default_factory=list)
    color: str | None = None  # Predecessor's project colour


@dataclass
class _Window:
    start: datetime
    end: datetime
    seconds: float

    def x(self, moment: datetime, width: float) -> float:
        return (moment - self.start).total_seconds() * width / self.seconds


def _window(window_start: DateLike, window_end: DateLike) -> _Window:
    start = parse_task_date(window_start)
    end = parse_task_date(window_end)
    if start is None or end is None:
        raise ValidationError(
            "Chart window needs valid start and end dates",
            details={"window_start": str(window_start), "window_end": str(window_end)},
        )
    seconds = (end - start).total_seconds()
    if seconds <= 0:
        raise ValidationError(
            "Chart window must end after it starts",
            details={"window_start": str(window_start), "window_end": str(window_end)},
        )
    return _Window(start=start, end=end, seconds=seconds)


def _fmt(value: float) -> str:
    return f"{value:g}"


def calculate_task_position(
    task: Task,
    window_start: DateLike,
    window_end: DateLike,
    total_width: float,
    min_width: float | None = None,
) -> TaskBarPosition | None:
    """Place a task bar within a chart window.

    The bar is clipped to the window and never drawn narrower than
    ``min_width`` (``engine_config.gantt_min_bar_width`` when not given).

    Returns:
        TaskBarPosition, or None if the task lacks a start or due date

    Raises:
        ValidationError: If the window is empty or unparsable
    """
    if task.start_date is None or task.due_date is None:
        return None
    if min_width is None:
        min_width = engine_config.gantt_min_bar_width

    window = _window(window_start, window_end)
    bar_start = max(task.start_date, window.start)
    bar_end = min(task.due_date, window.end)

    left = window.x(bar_start, total_width)
    width = window.x(bar_end, total_width) - left
    return TaskBarPosition(
        left=max(0.0, left),
        width=max(min_width, width),
        is_out_of_range=task.start_date < window.start or task.due_date > window.end,
    )


def calculate_dependency_arrow(
    from_task: Task,
    to_task: Task,
    window_start: DateLike,
    window_end: DateLike,
    chart_width: float,
    row_height: float,
    from_index: int,
    to_index: int,
) -> DependencyArrow | None:
    """Compute the connector from ``from_task``'s due date to ``to_task``'s start.

    The path leaves the predecessor horizontally, turns at the midpoint,
    and enters the dependent horizontally; the arrowhead points right at the
    dependent's start.

    Returns:
        DependencyArrow, or None when a required date is missing

    Raises:
        ValidationError: If the window is empty or unparsable
    """
    if from_task.due_date is None or to_task.start_date is None:
        return None

    window = _window(window_start, window_end)
    from_x = window.x(from_task.due_date, chart_width)
    to_x = window.x(to_task.start_date, chart_width)
    from_y = from_index * row_height + row_height / 2
    to_y = to_index * row_height + row_height / 2
    mid_x = (from_x + to_x) / 2

    path = (
        f"M {_fmt(from_x)} {_fmt(from_y)} "
        f"L {_fmt(mid_x)} {_fmt(from_y)} "
        f"L {_fmt(mid_x)} {_fmt(to_y)} "
        f"L {_fmt(to_x)} {_fmt(to_y)}"
    )
    arrowhead = [
        (to_x, to_y),
        (to_x - ARROWHEAD_LENGTH, to_y - ARROWHEAD_HALF_HEIGHT),
        (to_x - ARROWHEAD_LENGTH, to_y + ARROWHEAD_HALF_HEIGHT),
    ]
    return DependencyArrow(
        key=f"{from_task.id}-{to_task.id}",
        path=path,
        from_x=from_x,
        from_y=from_y,
        to_x=to_x,
        to_y=to_y,
        arrowhead=arrowhead,
        color=from_task.project_color,
    )


def build_dependency_arrows(
    rows: Sequence[Task],
    window_start: DateLike,
    window_end: DateLike,
    chart_width: float,
    row_height: float,
) -> list[DependencyArrow]:
    """Compute arrows for every dependency between displayed rows.

    ``rows`` is the display order; a task's row index is its position.
    Dependencies on tasks that are not displayed, or that lack dates, are
    skipped.
    """
    row_index: dict[str, int] = {}
    for position, task in enumerate(rows):
        row_index.setdefault(task.id, position)

    arrows: list[DependencyArrow] = []
    for to_index, task in enumerate(rows):
        for dep_id in task.dependencies:
            from_index = row_index.get(dep_id)
            if from_index is None:
                continue
            arrow = calculate_dependency_arrow(
                rows[from_index],
                task,
                window_start,
                window_end,
                chart_width,
                row_height,
                from_index,
                to_index,
            )
            if arrow is not None:
                arrows.append(arrow)

    log.debug("dependency_arrows_built", rows=len(rows), arrows=len(arrows))
    return arrows
