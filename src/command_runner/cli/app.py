"""Main CLI application for command-runner."""

import importlib
import io

import typer
from rich.console import Console

from command_runner import __version__
from command_runner.cli.context import create_runner, resolve_config
from command_runner.cli.options import (
    ConfigOption,
    JsonOption,
    LogLevelOption,
    SetOption,
)
from command_runner.commands import default_repository, print_command_help
from command_runner.config import load_config
from command_runner.config.defaults import get_config_path
from command_runner.exceptions import CommandNotFoundError, CommandRunnerError

app = typer.Typer(
    name="command-runner",
    help="Run named commands with layered configuration.",
    add_completion=False,
    no_args_is_help=True,
)

# Rich console for output
console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)


def _echo(text: str, *, err: bool = False) -> None:
    """Print captured command text verbatim."""
    target = err_console if err else console
    target.print(text, end="", markup=False, highlight=False)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"command-runner version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    modules: list[str] | None = typer.Option(
        None,
        "--module",
        "-m",
        help="Import a module that registers commands. Repeatable.",
    ),
) -> None:
    """Run named commands with layered configuration."""
    for module in modules or []:
        try:
            importlib.import_module(module)
        except ImportError as e:
            err_console.print(f"[red]Error:[/red] cannot import {module}: {e}")
            raise typer.Exit(1) from None


@app.command()
def run(
    name: str = typer.Argument(..., help="Command to run (case-insensitive)."),
    assignments: SetOption = None,
    config_path: ConfigOption = None,
    json_output: JsonOption = False,
    log_level: LogLevelOption = None,
) -> None:
    """Run a registered command."""
    try:
        config = resolve_config(config_path)
        runner = create_runner(config, assignments, log_level=log_level)
    except CommandRunnerError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(e.exit_code) from None

    result = runner.run(name)

    if json_output:
        console.print_json(data=result.to_dict())
    else:
        if result.info_log:
            _echo(result.info_log)
        if result.error_log:
            _echo(result.error_log.rstrip("\n") + "\n", err=True)

    if not result.succeed:
        raise typer.Exit(result.exit_code)


@app.command()
def describe(
    name: str = typer.Argument(..., help="Command to describe."),
) -> None:
    """Print a command's help."""
    cmd = default_repository.get(name)
    if cmd is None:
        error = CommandNotFoundError(name, default_repository.list_names())
        err_console.print(str(error), markup=False, highlight=False)
        raise typer.Exit(error.exit_code)

    buffer = io.StringIO()
    print_command_help(buffer, cmd.definition())
    _echo(buffer.getvalue())


@app.command("commands")
def list_commands() -> None:
    """List all available commands."""
    definitions = [cmd.definition() for cmd in default_repository.get_commands()]

    console.print("[bold]Available Commands[/bold]\n")
    for definition in definitions:
        console.print(f"  [cyan]{definition.name}[/cyan]")
        if definition.help:
            console.print(f"    {definition.help}", markup=False)
        console.print()


@app.command("config")
def config_cmd(
    config_path: ConfigOption = None,
    show_path: bool = typer.Option(
        False,
        "--path",
        "-p",
        help="Show config file path.",
    ),
    init: bool = typer.Option(
        False,
        "--init",
        help="Write the default config file if it doesn't exist.",
    ),
) -> None:
    """Show current configuration."""
    path = config_path or get_config_path()
    if show_path:
        console.print(str(path))
        return

    try:
        if init:
            config = load_config(path, create_if_missing=True)
        else:
            config = resolve_config(config_path)
    except CommandRunnerError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(e.exit_code) from None

    console.print("[bold]command-runner configuration[/bold]\n")
    console.print(f"Config file: {path}")
    console.print(f"Environment prefix: {config.env_prefix}")
    console.print(f"Log level: {config.logging.level}")
    console.print(f"Variables: {len(config.variables)} top-level entries")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
