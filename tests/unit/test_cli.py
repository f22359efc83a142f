"""Tests for the command-line interface."""

import json
from collections.abc import Generator
from pathlib import Path

import pytest
from typer.testing import CliRunner

from command_runner import __version__
from command_runner.cli.app import app
from command_runner.cli.options import parse_assignments
from command_runner.commands import (
    CommandRunContext,
    ParameterDefinition,
    command,
    default_repository,
)
from command_runner.config.defaults import ENV_CONFIG_PATH
from command_runner.exceptions import ConfigValidationError
from command_runner.utils.logging import logger

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_cli(
    temp_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Point the CLI at an empty config and register sample commands."""
    monkeypatch.setenv(ENV_CONFIG_PATH, str(temp_dir / "absent.toml"))
    handlers = list(logger.handlers)

    @command(
        "greet",
        "Say hello",
        [
            ParameterDefinition("name", "Who to greet", required=True),
            ParameterDefinition("greeting", "Greeting word", default_value="Hello"),
        ],
    )
    def greet(ctx: CommandRunContext) -> None:
        ctx.info.write(f"{ctx.get('greeting')}, {ctx.get('name')}!\n")

    @command("crash")
    def crash(ctx: CommandRunContext) -> None:
        raise ValueError("bad input")

    yield

    default_repository.unregister("greet")
    default_repository.unregister("crash")
    logger.handlers[:] = handlers


class TestRun:
    """Tests for the run command."""

    def test_success(self) -> None:
        result = runner.invoke(app, ["run", "greet", "--set", "name=Ada"])

        assert result.exit_code == 0
        assert "Hello, Ada!" in result.output

    def test_case_insensitive(self) -> None:
        result = runner.invoke(app, ["run", "GREET", "-s", "name=Ada"])

        assert result.exit_code == 0

    def test_scoped_override(self) -> None:
        result = runner.invoke(
            app,
            [
                "run",
                "greet",
                "--set",
                "name=Ada",
                "--set",
                "Commands:greet:greeting=Hi",
                "--set",
                "greeting=Hey",
            ],
        )

        assert result.exit_code == 0
        assert "Hi, Ada!" in result.output

    def test_values_from_config_file(self, temp_dir: Path) -> None:
        config_path = temp_dir / "config.toml"
        config_path.write_text('[variables.Commands.greet]\nname = "Grace"\n')

        result = runner.invoke(app, ["run", "greet", "--config", str(config_path)])

        assert result.exit_code == 0
        assert "Hello, Grace!" in result.output

    def test_values_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CMDRUN_Commands__greet__name", "Linus")

        result = runner.invoke(app, ["run", "greet"])

        assert result.exit_code == 0
        assert "Hello, Linus!" in result.output

    def test_missing_parameter(self) -> None:
        result = runner.invoke(app, ["run", "greet"])

        assert result.exit_code == 42
        assert "Missing required parameters <name>" in result.output
        assert "Command Parameters:" in result.output

    def test_not_found(self) -> None:
        result = runner.invoke(app, ["run", "nope"])

        assert result.exit_code == 41
        assert "Command nope not found" in result.output
        assert "greet" in result.output

    def test_command_error(self) -> None:
        result = runner.invoke(app, ["run", "crash"])

        assert result.exit_code == 43
        assert "Exception occurred:" in result.output
        assert "ValueError: bad input" in result.output

    def test_json_output(self) -> None:
        result = runner.invoke(app, ["run", "greet", "-s", "name=Ada", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["succeed"] is True
        assert data["info_log"] == "Hello, Ada!\n"
        assert data["kind"] is None

    def test_invalid_assignment(self) -> None:
        result = runner.invoke(app, ["run", "greet", "--set", "name"])

        assert result.exit_code == 22
        assert "KEY=VALUE" in result.output

    def test_missing_config_file(self, temp_dir: Path) -> None:
        result = runner.invoke(
            app, ["run", "greet", "--config", str(temp_dir / "missing.toml")]
        )

        assert result.exit_code == 21

    def test_help_command(self) -> None:
        result = runner.invoke(app, ["run", "help"])

        assert result.exit_code == 0
        assert "Usage: command-runner <command> [parameters]" in result.output
        assert "  greet:" in result.output


class TestOtherCommands:
    """Tests for describe, commands, config and --version."""

    def test_describe(self) -> None:
        result = runner.invoke(app, ["describe", "Greet"])

        assert result.exit_code == 0
        assert "<name>:" in result.output
        assert "Optional, DefaultValue: Hello" in result.output

    def test_describe_unknown(self) -> None:
        result = runner.invoke(app, ["describe", "nope"])

        assert result.exit_code == 41

    def test_commands(self) -> None:
        result = runner.invoke(app, ["commands"])

        assert result.exit_code == 0
        assert "help" in result.output
        assert "Say hello" in result.output

    def test_config(self, temp_dir: Path) -> None:
        result = runner.invoke(app, ["config"])

        assert result.exit_code == 0
        assert "Environment prefix: CMDRUN_" in result.output

    def test_config_path(self, temp_dir: Path) -> None:
        result = runner.invoke(app, ["config", "--path"])

        assert result.exit_code == 0
        assert "absent.toml" in result.output

    def test_config_init_writes_default_file(self, temp_dir: Path) -> None:
        config_path = temp_dir / "nested" / "config.toml"

        result = runner.invoke(app, ["config", "--init", "--config", str(config_path)])

        assert result.exit_code == 0
        assert config_path.exists()
        assert "Environment prefix: CMDRUN_" in result.output

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_unknown_module(self) -> None:
        result = runner.invoke(app, ["--module", "no_such_module_xyz", "commands"])

        assert result.exit_code == 1


class TestParseAssignments:
    """Tests for KEY=VALUE parsing."""

    def test_parse(self) -> None:
        assert parse_assignments(["a=1", "Commands:x:b=2=3", "a=4", "e="]) == {
            "a": "4",
            "Commands:x:b": "2=3",
            "e": "",
        }

    def test_none(self) -> None:
        assert parse_assignments(None) == {}

    @pytest.mark.parametrize("item", ["novalue", "=value"])
    def test_invalid(self, item: str) -> None:
        with pytest.raises(ConfigValidationError):
            parse_assignments([item])
