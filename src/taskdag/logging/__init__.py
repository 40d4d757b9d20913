"""Structured logging for taskdag.

Usage:
    from taskdag.logging import configure_logging, get_logger

    # At application startup
    configure_logging(level="DEBUG")

    # In modules
    log = get_logger()
    log.debug("validation_complete", task_id="t-1", errors=0)
"""

from taskdag.logging.config import configure_logging, get_logger
from taskdag.logging.formatters import TaskDagRenderer

__all__ = [
    "TaskDagRenderer",
    "configure_logging",
    "get_logger",
]
