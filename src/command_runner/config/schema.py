"""Pydantic models for command-runner configuration."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "WARNING"
    file: Path | None = None  # Default: no file logging
    json_format: bool = False
    color: bool = True


class RunnerConfig(BaseModel):
    """Root configuration for command-runner."""

    env_prefix: str = "CMDRUN_"
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    # Nested tables, flattened into "a:b:c" configuration keys
    variables: dict[str, Any] = Field(default_factory=dict)
