"""CLI interface for command-runner."""

from command_runner.cli.app import app, main

__all__ = ["app", "main"]
