"""Engine configuration for taskdag.

Settings are read from ``TASKDAG_``-prefixed environment variables or a
local ``.env`` file.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineConfig(BaseSettings):
    """Settings shared by the dependency engine and the Gantt adapter."""

    model_config = SettingsConfigDict(
        env_prefix="TASKDAG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Runtime environment",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )

    # Scheduling
    default_duration_days: int = Field(
        default=1,
        ge=1,
        description="Duration assumed for tasks without a usable start/due date pair",
    )
    critical_slack_tolerance: float = Field(
        default=0.01,
        gt=0,
        description="Slack below this magnitude marks a task as critical",
    )

    # Gantt rendering
    gantt_min_bar_width: float = Field(
        default=10.0,
        ge=0,
        description="Minimum drawn width of a task bar",
    )


# Default engine config instance
engine_config = EngineConfig()
