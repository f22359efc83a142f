"""Base command pattern implementation.

This module provides the foundation for all commands: the static
CommandDefinition metadata, the CommandRunContext handed to a command
while it runs, the CommandRunResult returned by the runner, and the
Command abstract class for command implementations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, TextIO

from command_runner.config.variables import ConfigVariables
from command_runner.exceptions import (
    CommandExecutionError,
    CommandNotFoundError,
    MissingParametersError,
)


@dataclass(frozen=True)
class ParameterDefinition:
    """A named input declared by a command.

    Attributes:
        name: Configuration key the value is looked up under.
        help: One-line description shown in help output.
        required: Whether the command refuses to run without a value.
            A required parameter's default never satisfies it.
        default_value: Value used when nothing is configured.
    """

    name: str
    help: str = ""
    required: bool = False
    default_value: str = ""


@dataclass(frozen=True)
class CommandDefinition:
    """Static metadata for a command.

    Attributes:
        name: Command name, unique per repository ignoring case.
        help: Description shown in help output.
        parameters: Declared parameters, in display order.
    """

    name: str
    help: str = ""
    parameters: tuple[ParameterDefinition, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.parameters, tuple):
            object.__setattr__(self, "parameters", tuple(self.parameters))

    @property
    def required_parameters(self) -> tuple[ParameterDefinition, ...]:
        return tuple(p for p in self.parameters if p.required)


@dataclass(frozen=True)
class CommandRunContext:
    """Execution-time bundle passed to a command.

    Attributes:
        vars: Effective configuration view (overrides, globals, defaults).
        info: Sink for regular output.
        error: Sink for error output.
    """

    vars: ConfigVariables
    info: TextIO
    error: TextIO

    def get(self, name: str, default: str | None = None) -> str | None:
        """Look up a parameter value, falling back to ``default``."""
        value = self.vars.get(name)
        return default if value is None else value


class FailureKind(str, Enum):
    """Why a command run failed."""

    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    EXECUTION = "execution"

    @property
    def exit_code(self) -> int:
        return _EXIT_CODES[self]


_EXIT_CODES = {
    FailureKind.NOT_FOUND: CommandNotFoundError.exit_code,
    FailureKind.VALIDATION: MissingParametersError.exit_code,
    FailureKind.EXECUTION: CommandExecutionError.exit_code,
}


@dataclass(frozen=True)
class CommandRunResult:
    """Outcome of a single command run.

    Use ``CommandRunResult.ok`` or ``CommandRunResult.fail`` to create one.

    Attributes:
        succeed: Whether the command ran to completion.
        error_log: Captured error text; always empty on success.
        info_log: Captured info text, or help/diagnostics on failure.
        kind: Failure category, None on success.
    """

    succeed: bool
    error_log: str = ""
    info_log: str = ""
    kind: FailureKind | None = None

    @classmethod
    def ok(cls, info: str) -> "CommandRunResult":
        """Create a successful result."""
        return cls(succeed=True, error_log="", info_log=info)

    @classmethod
    def fail(
        cls,
        error: str,
        info: str = "",
        kind: FailureKind = FailureKind.EXECUTION,
    ) -> "CommandRunResult":
        """Create a failed result."""
        return cls(succeed=False, error_log=error, info_log=info, kind=kind)

    @property
    def exit_code(self) -> int:
        """Process exit code for this result."""
        if self.succeed or self.kind is None:
            return 0 if self.succeed else 1
        return self.kind.exit_code

    def to_dict(self) -> dict[str, Any]:
        return {
            "succeed": self.succeed,
            "error_log": self.error_log,
            "info_log": self.info_log,
            "kind": self.kind.value if self.kind else None,
        }


class Command(ABC):
    """Abstract base class for all commands.

    A command declares its parameters through ``definition`` and reads
    their values from ``ctx.vars`` when run. Output goes to ``ctx.info``
    and ``ctx.error``; raising marks the run as failed.

    Example:
        class DeployCommand(Command):
            def definition(self) -> CommandDefinition:
                return CommandDefinition(
                    "deploy",
                    "Deploy the current build",
                    [ParameterDefinition("env", "Target environment", required=True)],
                )

            def run(self, ctx: CommandRunContext) -> None:
                print(f"Deploying to {ctx.vars['env']}", file=ctx.info)
    """

    @abstractmethod
    def definition(self) -> CommandDefinition:
        """Static metadata for this command."""
        pass

    @abstractmethod
    def run(self, ctx: CommandRunContext) -> None:
        """Run the command.

        Args:
            ctx: Resolved configuration and output sinks.

        Raises:
            Exception: Any error; the runner converts it into a failed result.
        """
        pass

    @property
    def name(self) -> str:
        return self.definition().name

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
