"""Command repository for registering and listing commands."""

from collections.abc import Callable, Iterable
from typing import TypeVar

from command_runner.commands.base import (
    Command,
    CommandDefinition,
    CommandRunContext,
    ParameterDefinition,
)
from command_runner.commands.help import HelpCommand

CommandT = TypeVar("CommandT", bound=Command)
RunFunction = Callable[[CommandRunContext], None]


class CommandRepository:
    """Ordered collection of command instances.

    Names are unique ignoring case. Commands can be registered either
    directly or by decorating a ``Command`` subclass, which is then
    instantiated with no arguments.

    Usage:
        repository = CommandRepository()

        @repository.register
        class DeployCommand(Command):
            ...

        repository.register(HelpCommand(lambda: repository))

        runner = CommandRunner(repository, config_vars)
    """

    def __init__(self, commands: Iterable[Command] = ()) -> None:
        self._commands: dict[str, Command] = {}
        for cmd in commands:
            self.register(cmd)

    def register(self, command: Command | type[CommandT]) -> Command | type[CommandT]:
        """Register a command instance or a ``Command`` subclass.

        Args:
            command: Instance, or class to instantiate with no arguments.

        Returns:
            The argument, unchanged, so this works as a class decorator.

        Raises:
            ValueError: If a command with the same name is already registered.
        """
        instance = command() if isinstance(command, type) else command
        key = instance.name.casefold()

        if key in self._commands:
            raise ValueError(f"Command '{instance.name}' is already registered")

        self._commands[key] = instance
        return command

    def get(self, name: str) -> Command | None:
        """Get a command by name, ignoring case."""
        return self._commands.get(name.casefold())

    def get_commands(self) -> tuple[Command, ...]:
        """All registered commands, in registration order."""
        return tuple(self._commands.values())

    def list_names(self) -> list[str]:
        return [cmd.name for cmd in self._commands.values()]

    def is_registered(self, name: str) -> bool:
        return name.casefold() in self._commands

    def unregister(self, name: str) -> bool:
        """Unregister a command by name.

        Returns:
            True if unregistered, False if not found.
        """
        return self._commands.pop(name.casefold(), None) is not None

    def clear(self) -> None:
        """Remove all commands (mainly for testing)."""
        self._commands.clear()

    def __len__(self) -> int:
        return len(self._commands)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(names={self.list_names()!r})"


class FunctionCommand(Command):
    """Command backed by a plain function taking the run context."""

    def __init__(self, definition: CommandDefinition, func: RunFunction) -> None:
        self._definition = definition
        self.func = func

    def definition(self) -> CommandDefinition:
        return self._definition

    def run(self, ctx: CommandRunContext) -> None:
        self.func(ctx)


def create_default_repository(
    program_name: str = "command-runner",
) -> CommandRepository:
    """Create a repository holding only the built-in ``help`` command."""
    repository = CommandRepository()
    repository.register(HelpCommand(lambda: repository, program_name))
    return repository


default_repository = create_default_repository()


def command(
    name: str | None = None,
    help_text: str | None = None,
    parameters: Iterable[ParameterDefinition] = (),
    *,
    repository: CommandRepository | None = None,
) -> Callable[[RunFunction], FunctionCommand]:
    """Decorator factory registering a function as a command.

    Args:
        name: Command name. Defaults to the function name with
            underscores replaced by dashes.
        help_text: Help text. Defaults to the first line of the docstring.
        parameters: Declared parameters.
        repository: Target repository. Defaults to ``default_repository``.

    Returns:
        Decorator returning the registered FunctionCommand.

    Example:
        @command("deploy", parameters=[ParameterDefinition("env", required=True)])
        def deploy(ctx: CommandRunContext) -> None:
            print(f"Deploying to {ctx.vars['env']}", file=ctx.info)
    """

    def decorator(func: RunFunction) -> FunctionCommand:
        doc_lines = (func.__doc__ or "").strip().splitlines()
        summary = doc_lines[0] if doc_lines else ""
        definition = CommandDefinition(
            name=name or func.__name__.replace("_", "-"),
            help=summary if help_text is None else help_text,
            parameters=tuple(parameters),
        )
        cmd = FunctionCommand(definition, func)
        target = repository if repository is not None else default_repository
        target.register(cmd)
        return cmd

    return decorator
