"""Command runner: resolve, configure, validate and execute commands.

``CommandRunner.run`` never raises for ``Exception`` subclasses, whether
they come from lookup, the configuration view, help rendering or the
command itself. Every outcome is packaged into a ``CommandRunResult``.
"""

import io
import logging
import traceback
from types import MappingProxyType

from command_runner.commands.base import (
    Command,
    CommandDefinition,
    CommandRunContext,
    CommandRunResult,
    FailureKind,
)
from command_runner.commands.help import SupportsGetCommands, print_command_help
from command_runner.config.defaults import COMMANDS_SECTION
from command_runner.config.variables import (
    KEY_DELIMITER,
    ConfigVariables,
    ConfigVariablesBuilder,
)
from command_runner.exceptions import CommandNotFoundError, MissingParametersError
from command_runner.utils.logging import get_logger, log_with_context

logger = get_logger(__name__)


class CommandDefinitionConfigVariables(ConfigVariables):
    """Expose each parameter's default value under the parameter name."""

    def __init__(self, definition: CommandDefinition) -> None:
        self.definition = definition
        self._defaults: dict[str, str] = {}
        for parameter in definition.parameters:
            # First declaration wins for repeated names
            self._defaults.setdefault(parameter.name, parameter.default_value)

    def get(self, key: str) -> str | None:
        return self._defaults.get(key)


class CommandRunner:
    """Run commands by name against a global configuration view.

    Configuration precedence for a command ``deploy``, highest first:

    1. ``Commands:deploy:<param>`` in ``config_vars``
    2. ``<param>`` in ``config_vars``
    3. The parameter's declared default

    Required parameters must be satisfied by (1) or (2).

    Usage:
        runner = CommandRunner(repository, config_vars)
        result = runner.run("deploy")
        if not result.succeed:
            print(result.error_log, file=sys.stderr)
    """

    def __init__(
        self,
        repository: SupportsGetCommands,
        config_vars: ConfigVariables,
    ) -> None:
        self.config_vars = config_vars
        commands: tuple[Command, ...] = tuple(repository.get_commands())

        index: dict[str, Command] = {}
        for cmd in commands:
            index.setdefault(cmd.definition().name.casefold(), cmd)

        self._commands = commands
        self._index = MappingProxyType(index)

    @property
    def command_names(self) -> list[str]:
        return [cmd.definition().name for cmd in self._commands]

    def find(self, command_name: str) -> Command | None:
        """Look up a command by name, ignoring case."""
        return self._index.get(command_name.casefold())

    def run(self, command_name: str) -> CommandRunResult:
        """Run a command by name.

        Args:
            command_name: Command name, matched ignoring case.

        Returns:
            Ok with the captured info text, or Fail describing a missing
            command, missing required parameters, or an error raised while
            configuring or running the command.
        """
        try:
            return self._run(command_name)
        except Exception as e:
            logger.error("Running %s failed: %s: %s", command_name, type(e).__name__, e)
            return _exception_result("", "", e)

    def _run(self, command_name: str) -> CommandRunResult:
        try:
            command = self._resolve(command_name)
        except CommandNotFoundError as e:
            logger.warning("Command not found: %s", command_name)
            return CommandRunResult.fail(str(e), kind=FailureKind.NOT_FOUND)

        definition = command.definition()
        task_vars = self.command_vars(definition)

        try:
            self._validate(definition, task_vars)
        except MissingParametersError as e:
            logger.warning(
                "Command %s is missing parameters: %s",
                definition.name,
                ", ".join(e.missing),
            )
            info = io.StringIO()
            print_command_help(info, definition)
            return CommandRunResult.fail(
                str(e), info.getvalue(), kind=FailureKind.VALIDATION
            )

        effective_vars = (
            ConfigVariablesBuilder()
            .add(CommandDefinitionConfigVariables(definition))
            .add(task_vars)
            .build()
        )
        return self._execute(command, effective_vars)

    def command_vars(self, definition: CommandDefinition) -> ConfigVariables:
        """Global view overlaid with the ``Commands:<name>:`` section."""
        prefix = f"{COMMANDS_SECTION}{KEY_DELIMITER}{definition.name}{KEY_DELIMITER}"
        return (
            ConfigVariablesBuilder()
            .add(self.config_vars)
            .add(self.config_vars.with_prefix(prefix))
            .build()
        )

    def _resolve(self, command_name: str) -> Command:
        command = self.find(command_name)
        if command is None:
            raise CommandNotFoundError(command_name, self.command_names)
        log_with_context(
            logger,
            logging.DEBUG,
            "Resolved command",
            requested=command_name,
            command=command.definition().name,
        )
        return command

    @staticmethod
    def _validate(definition: CommandDefinition, task_vars: ConfigVariables) -> None:
        unresolved = (
            p.name
            for p in definition.required_parameters
            if task_vars.get(p.name) is None
        )
        missing = list(dict.fromkeys(unresolved))
        if missing:
            raise MissingParametersError(missing)

    @staticmethod
    def _execute(command: Command, effective_vars: ConfigVariables) -> CommandRunResult:
        error = io.StringIO()
        info = io.StringIO()
        name = command.definition().name

        log_with_context(logger, logging.DEBUG, "Running command", command=name)
        try:
            command.run(CommandRunContext(effective_vars, info, error))
        except Exception as e:
            logger.error("Command %s raised %s: %s", name, type(e).__name__, e)
            return _exception_result(error.getvalue(), info.getvalue(), e)

        log_with_context(logger, logging.DEBUG, "Command finished", command=name)
        return CommandRunResult.ok(info.getvalue())


def _exception_result(error: str, info: str, exc: Exception) -> CommandRunResult:
    """Package an unexpected error, appending its traceback to the info text."""
    diagnostic = "Exception occurred:\n" + "".join(traceback.format_exception(exc))
    return CommandRunResult.fail(error, info + diagnostic, kind=FailureKind.EXECUTION)
