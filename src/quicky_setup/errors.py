"""Exception hierarchy shared by the scaffolder, the feature adder and the CLI."""

from __future__ import annotations


class QuickyError(Exception):
    """Base class for every error raised by quicky-setup."""


class ConfigurationError(QuickyError):
    """Raised when answers or an existing project cannot be used as given."""


class CommandError(QuickyError):
    """Raised when an external command exits with a non-zero status."""

    def __init__(self, command: list[str], returncode: int, stderr: str = "") -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        message = f"Command failed with exit code {returncode}: {' '.join(command)}"
        if stderr:
            message = f"{message}\n{stderr}"
        super().__init__(message)


class ScaffoldError(QuickyError):
    """Raised when a fatal scaffolding step fails irrecoverably."""

    def __init__(self, step: str, message: str) -> None:
        self.step = step
        super().__init__(f"Step '{step}': {message}")
