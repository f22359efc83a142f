"""Configuration management."""

from command_runner.config.loader import (
    build_config_variables,
    get_config,
    load_config,
    reset_config,
)
from command_runner.config.schema import RunnerConfig
from command_runner.config.variables import (
    ConfigVariables,
    ConfigVariablesBuilder,
    DictConfigVariables,
    EnvironmentConfigVariables,
    LayeredConfigVariables,
    PrefixedConfigVariables,
    flatten_mapping,
)

__all__ = [
    "ConfigVariables",
    "ConfigVariablesBuilder",
    "DictConfigVariables",
    "EnvironmentConfigVariables",
    "LayeredConfigVariables",
    "PrefixedConfigVariables",
    "RunnerConfig",
    "build_config_variables",
    "flatten_mapping",
    "get_config",
    "load_config",
    "reset_config",
]
