"""Logging configuration for taskdag.

Usage:
    from taskdag.logging import configure_logging, get_logger

    configure_logging(level="DEBUG")
    log = get_logger()
    log.debug("topological_sort_complete", tasks=12)
"""

from __future__ import annotations

import logging
import sys

import structlog

from taskdag.config import engine_config
from taskdag.logging.formatters import TaskDagRenderer


def configure_logging(
    *,
    component: str = "engine",
    level: str | None = None,
    colors: bool | None = None,
    json_output: bool = False,
) -> None:
    """Configure structlog for the engine.

    Call this once at application startup. The engine itself never calls it;
    hosts that do not configure logging get structlog's defaults, which print
    every level (engine debug events included) to stdout. Configure with
    ``level="INFO"`` or higher to keep per-call debug events quiet.

    Args:
        component: Component label shown in console output
        level: Minimum log level (defaults to ``engine_config.log_level``)
        colors: Enable colors (auto-detect TTY if None)
        json_output: Use JSON output for log aggregation
    """
    level = level or engine_config.log_level
    if colors is None:
        colors = sys.stderr.isatty()

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[logging.StreamHandler()],
    )

    if json_output:
        renderer: structlog.typing.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = TaskDagRenderer(component=component, colors=colors)

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.typing.FilteringBoundLogger:
    """Get a logger instance.

    Args:
        name: Optional logger name (usually module __name__)
    """
    return structlog.get_logger(name)
