"""Shared CLI options for command-runner.

This module provides reusable Typer options shared across commands.
"""

from pathlib import Path
from typing import Annotated

import typer

from command_runner.exceptions import ConfigValidationError

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Config file. Defaults to $CMDRUN_CONFIG or "
        "~/.config/command-runner/config.toml.",
        dir_okay=False,
    ),
]

SetOption = Annotated[
    list[str] | None,
    typer.Option(
        "--set",
        "-s",
        help="Set a configuration value, e.g. --set env=prod or "
        "--set Commands:deploy:env=prod. Repeatable.",
    ),
]

JsonOption = Annotated[
    bool,
    typer.Option(
        "--json",
        help="Print the run result as JSON.",
    ),
]

LogLevelOption = Annotated[
    str | None,
    typer.Option(
        "--log-level",
        help="Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config setting.",
    ),
]


def parse_assignments(assignments: list[str] | None) -> dict[str, str]:
    """Turn ``KEY=VALUE`` strings into a flat mapping.

    Later assignments to the same key win.

    Raises:
        ConfigValidationError: If an item has no ``=`` or an empty key.
    """
    values: dict[str, str] = {}
    for item in assignments or []:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ConfigValidationError(
                f"Invalid assignment '{item}', expected KEY=VALUE"
            )
        values[key] = value
    return values
