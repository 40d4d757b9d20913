"""structlog renderer for taskdag.

Produces pipe-separated output: component | timestamp | level | event key=value...
"""

from __future__ import annotations

import os
import sys
from datetime import datetime
from typing import TYPE_CHECKING

from taskdag.logging.colors import (
    ANSI_AMBER,
    ANSI_DIM,
    ANSI_GREEN,
    ANSI_RESET,
    ANSI_ROSE,
    ANSI_SLATE_BLUE,
    COMPONENT_COLORS,
    LEVEL_COLORS,
)

if TYPE_CHECKING:
    from structlog.typing import EventDict, WrappedLogger


class TaskDagRenderer:
    """Console renderer for engine events.

    Output format: component | HH:MM:SS | level | event key=value...

    Example:
        engine | 10:02:11 | debug | critical_path_complete tasks=4 project_duration=10
    """

    def __init__(
        self,
        component: str = "engine",
        component_width: int = 6,
        colors: bool | None = None,
    ) -> None:
        self.component = component
        self.component_width = component_width

        if colors is None:
            force_color = os.environ.get("FORCE_COLOR", "")
            self.colors = sys.stderr.isatty() or force_color not in ("", "0", "false")
        else:
            self.colors = colors

    def __call__(
        self,
        logger: WrappedLogger,
        method_name: str,
        event_dict: EventDict,
    ) -> str:
        """Render a log event to a formatted string."""
        timestamp = event_dict.pop("timestamp", datetime.now().strftime("%H:%M:%S"))
        level = event_dict.pop("level", method_name).lower()
        event = str(event_dict.pop("event", ""))
        kv_pairs = self._format_kv_pairs(event_dict)

        if self.colors:
            comp_color = COMPONENT_COLORS.get(self.component, ANSI_SLATE_BLUE)
            component = f"{comp_color}{self.component:<{self.component_width}}{ANSI_RESET}"
            ts = f"{ANSI_DIM}{timestamp}{ANSI_RESET}"
            lvl = f"{LEVEL_COLORS.get(level, LEVEL_COLORS['info'])}{level:<5}{ANSI_RESET}"
        else:
            component = f"{self.component:<{self.component_width}}"
            ts = timestamp
            lvl = f"{level:<5}"

        line = f"{component} | {ts} | {lvl} | {event}"
        if kv_pairs:
            line += f" {kv_pairs}"
        return line

    def _format_kv_pairs(self, event_dict: EventDict) -> str:
        pairs = []
        for key, value in event_dict.items():
            if key.startswith("_"):
                continue

            if self.colors and isinstance(value, bool):
                color = ANSI_GREEN if value else ANSI_ROSE
                pairs.append(f"{key}={color}{value}{ANSI_RESET}")
            elif self.colors and isinstance(value, (int, float)):
                pairs.append(f"{key}={ANSI_AMBER}{value}{ANSI_RESET}")
            else:
                pairs.append(f"{key}={value}")

        return " ".join(pairs)
