"""Version information for taskdag."""

from __future__ import annotations

from functools import lru_cache
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version


@lru_cache(maxsize=1)
def get_version() -> str:
    """Get the installed distribution version.

    Returns:
        - Installed: "0.1.0"
        - Source checkout without metadata: "0.0.0"
    """
    try:
        return pkg_version("taskdag")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = get_version()
