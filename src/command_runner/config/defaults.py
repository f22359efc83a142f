"""Default configuration values and paths."""

import os
from pathlib import Path
from typing import Final

# Default directories
DEFAULT_CONFIG_DIR: Final[Path] = Path.home() / ".config" / "command-runner"

# Default file paths
DEFAULT_CONFIG_FILE: Final[Path] = DEFAULT_CONFIG_DIR / "config.toml"

# Environment variable names
ENV_CONFIG_PATH: Final[str] = "CMDRUN_CONFIG"
ENV_LOG_LEVEL: Final[str] = "CMDRUN_LOG_LEVEL"
ENV_PREFIX: Final[str] = "CMDRUN_ENV_PREFIX"

# Configuration key prefix for per-command overrides
COMMANDS_SECTION: Final[str] = "Commands"

# Default config content (TOML)
DEFAULT_CONFIG_TOML: Final[str] = """\
# command-runner configuration

env_prefix = "CMDRUN_"

[logging]
level = "WARNING"
json_format = false
color = true

# Values visible to every command, looked up by parameter name.
[variables]

# Per-command overrides take precedence over the global values above.
# [variables.Commands.deploy]
# env = "staging"
"""


def get_config_path() -> Path:
    """Get the configuration file path."""
    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_FILE
