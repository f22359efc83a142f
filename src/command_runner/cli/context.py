"""Factory for building a CommandRunner from CLI options and config."""

from pathlib import Path

from command_runner.cli.options import parse_assignments
from command_runner.commands.registry import CommandRepository, default_repository
from command_runner.commands.runner import CommandRunner
from command_runner.config import build_config_variables, get_config, load_config
from command_runner.config.schema import RunnerConfig
from command_runner.utils.logging import setup_logging


def resolve_config(config_path: Path | None = None) -> RunnerConfig:
    """Load an explicit config file, or fall back to the shared one."""
    if config_path is not None:
        return load_config(config_path)
    return get_config()


def create_runner(
    config: RunnerConfig,
    assignments: list[str] | None = None,
    repository: CommandRepository | None = None,
    log_level: str | None = None,
) -> CommandRunner:
    """Create a CommandRunner with logging configured.

    Args:
        config: Loaded configuration.
        assignments: ``KEY=VALUE`` overrides from the command line.
        repository: Commands to run. Defaults to ``default_repository``.
        log_level: Overrides the configured log level.

    Returns:
        A runner over file, environment and command-line values.
    """
    setup_logging(
        level=log_level or config.logging.level,
        log_file=config.logging.file,
        json_format=config.logging.json_format,
        use_color=config.logging.color,
    )

    config_vars = build_config_variables(config, parse_assignments(assignments))
    return CommandRunner(
        repository if repository is not None else default_repository,
        config_vars,
    )
