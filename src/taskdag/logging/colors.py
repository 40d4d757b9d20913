"""Terminal palette for taskdag log output."""

from __future__ import annotations

# =============================================================================
# ANSI 24-bit Escape Codes
# =============================================================================

ANSI_SLATE_BLUE = "\033[38;2;122;162;247m"
ANSI_TEAL = "\033[38;2;115;218;202m"
ANSI_AMBER = "\033[38;2;224;175;104m"
ANSI_ROSE = "\033[38;2;247;118;142m"
ANSI_LAVENDER = "\033[38;2;187;154;247m"
ANSI_GREEN = "\033[38;2;158;206;106m"
ANSI_DIM = "\033[38;2;86;95;137m"
ANSI_RESET = "\033[0m"

# =============================================================================
# Log Level Color Mapping
# =============================================================================

LEVEL_COLORS: dict[str, str] = {
    "debug": ANSI_DIM,
    "info": ANSI_TEAL,
    "warning": ANSI_AMBER,
    "warn": ANSI_AMBER,
    "error": ANSI_ROSE,
    "critical": ANSI_LAVENDER,
}

# Component name -> color
COMPONENT_COLORS: dict[str, str] = {
    "engine": ANSI_SLATE_BLUE,
    "gantt": ANSI_TEAL,
}
