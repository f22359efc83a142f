"""Command dispatch for command-runner.

This module provides the command pattern infrastructure: command
definitions, a repository to register commands in, and a runner that
resolves a command by name, layers its configuration, validates its
required parameters and captures its output.

Usage:
    from command_runner.commands import (
        Command, CommandDefinition, CommandRunContext,
        CommandRunner, ParameterDefinition, command,
    )

    @command("deploy", parameters=[ParameterDefinition("env", required=True)])
    def deploy(ctx: CommandRunContext) -> None:
        print(f"Deploying to {ctx.vars['env']}", file=ctx.info)

    runner = CommandRunner(default_repository, config_vars)
    result = runner.run("deploy")
"""

from command_runner.commands.base import (
    Command,
    CommandDefinition,
    CommandRunContext,
    CommandRunResult,
    FailureKind,
    ParameterDefinition,
)
from command_runner.commands.help import HelpCommand, print_command_help
from command_runner.commands.registry import (
    CommandRepository,
    FunctionCommand,
    command,
    create_default_repository,
    default_repository,
)
from command_runner.commands.runner import (
    CommandDefinitionConfigVariables,
    CommandRunner,
)

__all__ = [
    # Base classes
    "Command",
    "CommandDefinition",
    "CommandRunContext",
    "CommandRunResult",
    "FailureKind",
    "ParameterDefinition",
    # Repository
    "CommandRepository",
    "FunctionCommand",
    "command",
    "create_default_repository",
    "default_repository",
    # Runner
    "CommandDefinitionConfigVariables",
    "CommandRunner",
    # Help
    "HelpCommand",
    "print_command_help",
]
