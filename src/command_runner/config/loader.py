"""Configuration loading from TOML files and environment variables."""

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path

from pydantic import ValidationError

from command_runner.config.defaults import (
    DEFAULT_CONFIG_TOML,
    ENV_LOG_LEVEL,
    ENV_PREFIX,
    get_config_path,
)
from command_runner.config.schema import RunnerConfig
from command_runner.config.variables import (
    ConfigVariables,
    ConfigVariablesBuilder,
    EnvironmentConfigVariables,
    flatten_mapping,
)
from command_runner.exceptions import (
    ConfigError,
    ConfigNotFoundError,
    ConfigValidationError,
)

# Global config instance (singleton)
_config: RunnerConfig | None = None


def load_config(
    config_path: Path | None = None,
    *,
    create_if_missing: bool = False,
) -> RunnerConfig:
    """Load configuration from a TOML file and environment variables.

    Args:
        config_path: Path to config file. If None, uses default.
        create_if_missing: Write the default config if the file doesn't exist.

    Returns:
        Loaded and validated configuration.

    Raises:
        ConfigNotFoundError: If an explicitly given file doesn't exist.
        ConfigError: If the file cannot be read or parsed.
        ConfigValidationError: If configuration is invalid.
    """
    path = config_path or get_config_path()

    if not path.exists():
        if create_if_missing:
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(DEFAULT_CONFIG_TOML)
            except OSError as e:
                raise ConfigError(f"Failed to create config at {path}: {e}") from e
        elif config_path is not None:
            raise ConfigNotFoundError(f"Config file not found: {path}")
        else:
            # Return default config without file
            return _apply_env_overrides(RunnerConfig())

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    try:
        config = RunnerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration: {e}") from e

    return _apply_env_overrides(config)


def _apply_env_overrides(config: RunnerConfig) -> RunnerConfig:
    """Apply environment variable overrides to configuration."""
    log_level = os.environ.get(ENV_LOG_LEVEL)
    if log_level:
        config.logging.level = log_level.upper()

    env_prefix = os.environ.get(ENV_PREFIX)
    if env_prefix is not None:
        config.env_prefix = env_prefix

    return config


def build_config_variables(
    config: RunnerConfig,
    overrides: Mapping[str, str] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> ConfigVariables:
    """Build the global configuration view.

    Precedence, lowest first: file ``variables``, environment variables
    under ``config.env_prefix``, explicit ``overrides``.

    Args:
        config: Loaded configuration.
        overrides: Flat ``a:b`` keyed values, e.g. from the command line.
        environ: Environment mapping. Defaults to ``os.environ``.

    Returns:
        Layered configuration view.
    """
    return (
        ConfigVariablesBuilder()
        .add_mapping(flatten_mapping(config.variables))
        .add(EnvironmentConfigVariables(config.env_prefix, environ))
        .add_mapping(overrides or {})
        .build()
    )


def get_config() -> RunnerConfig:
    """Get the current configuration (singleton).

    Loads config on first access, caches for subsequent calls.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset the configuration singleton (mainly for testing)."""
    global _config
    _config = None
