"""command-runner: resolve, configure and run named commands."""

__version__ = "0.1.0"
