"""Exception hierarchy for command-runner."""


class CommandRunnerError(Exception):
    """Base exception for all command-runner errors."""

    exit_code: int = 1
    user_message: str = "An error occurred"

    def __init__(
        self,
        message: str | None = None,
        *,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message or self.user_message)
        if user_message:
            self.user_message = user_message


# Config Errors
class ConfigError(CommandRunnerError):
    """Configuration errors."""

    exit_code = 20
    user_message = "Configuration error"


class ConfigNotFoundError(ConfigError):
    """Configuration file not found."""

    exit_code = 21
    user_message = "Configuration file not found"


class ConfigValidationError(ConfigError):
    """Configuration validation failed."""

    exit_code = 22
    user_message = "Invalid configuration"


# Command Errors
class CommandError(CommandRunnerError):
    """Command dispatch errors."""

    exit_code = 40
    user_message = "Command error"


class CommandNotFoundError(CommandError):
    """No registered command matches the requested name."""

    exit_code = 41
    user_message = "Command not found"

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = available
        super().__init__(
            f"Command {name} not found. "
            f"Available commands: [{', '.join(available)}]"
        )


class MissingParametersError(CommandError):
    """One or more required parameters have no configured value."""

    exit_code = 42
    user_message = "Missing required parameters"

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(
            "Missing required parameters "
            + ", ".join(f"<{name}>" for name in missing)
        )


class CommandExecutionError(CommandError):
    """A command raised while running."""

    exit_code = 43
    user_message = "Command failed"
