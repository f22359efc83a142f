"""Pytest fixtures for command-runner tests."""

import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from command_runner.config import reset_config
from command_runner.config.defaults import ENV_CONFIG_PATH, ENV_LOG_LEVEL, ENV_PREFIX
from command_runner.config.schema import RunnerConfig


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def default_config() -> RunnerConfig:
    """Get default configuration."""
    return RunnerConfig()


@pytest.fixture(autouse=True)
def reset_config_fixture(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Reset config singleton and config env vars between tests."""
    for name in (ENV_CONFIG_PATH, ENV_LOG_LEVEL, ENV_PREFIX):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def config_file(temp_dir: Path) -> Path:
    """Create a test config file."""
    config_path = temp_dir / "config.toml"
    config_path.write_text("""
env_prefix = "TESTRUN_"

[logging]
level = "debug"

[variables]
env = "global"
retries = 3
verbose = true

[variables.Commands.deploy]
env = "scoped"

[variables.servers]
hosts = ["alpha", "beta"]
""")
    return config_path
