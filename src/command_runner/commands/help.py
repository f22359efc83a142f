"""Help rendering and the built-in ``help`` command."""

from collections.abc import Callable, Iterable
from typing import Protocol, TextIO

from command_runner.commands.base import (
    Command,
    CommandDefinition,
    CommandRunContext,
)

EMPTY_DEFAULT = "<empty>"


class SupportsGetCommands(Protocol):
    def get_commands(self) -> Iterable[Command]: ...


def print_command_help(writer: TextIO, definition: CommandDefinition) -> None:
    """Render a command definition as an indented help block.

    Args:
        writer: Text sink to write to.
        definition: The command to describe.
    """
    writer.write(f"  {definition.name}:\n")
    writer.write("\n")
    writer.write(f"    {definition.help}\n")
    writer.write("\n")
    writer.write("  Command Parameters:\n")
    writer.write("\n")

    for parameter in definition.parameters:
        required = "Required!" if parameter.required else "Optional"
        default = parameter.default_value or EMPTY_DEFAULT
        writer.write(f"    <{parameter.name}>:\n")
        writer.write(f"      {parameter.help}\n")
        writer.write(f"      {required}, DefaultValue: {default}\n")

    writer.write("\n")
    writer.write("\n")


class HelpCommand(Command):
    """Print usage and the help block of every registered command.

    The repository is resolved through ``repository_thunk`` on every run,
    so commands registered after construction are listed too.
    """

    def __init__(
        self,
        repository_thunk: Callable[[], SupportsGetCommands],
        program_name: str = "command-runner",
    ) -> None:
        self.repository_thunk = repository_thunk
        self.program_name = program_name

    def definition(self) -> CommandDefinition:
        return CommandDefinition("help", "prints help info")

    def run(self, ctx: CommandRunContext) -> None:
        prog = self.program_name
        ctx.info.write(f"Usage: {prog} <command> [parameters]\n")
        ctx.info.write(f"Use: {prog} <command> --help to print command's help\n")
        ctx.info.write("Available commands: \n")
        ctx.info.write("\n")

        for command in self.repository_thunk().get_commands():
            print_command_help(ctx.info, command.definition())
