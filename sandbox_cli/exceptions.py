"""Custom exception hierarchy for the sandbox commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sandbox_cli.types import SandboxOutput


class SandboxError(Exception):
    """Base exception for all sandbox command errors."""


class ConfigError(SandboxError):
    """Raised when the configuration file is invalid."""


class ArgumentCountError(SandboxError):
    """Raised when a command receives the wrong number of positional arguments."""

    reason = "command has the wrong number of arguments"

    def __init__(self, command_name: str) -> None:
        self.command_name = command_name
        super().__init__(f"({command_name}) {self.reason}")


class MissingArgsError(ArgumentCountError):
    """Raised when a required positional argument is missing."""

    reason = "command is missing required arguments"


class TooManyArgsError(ArgumentCountError):
    """Raised when more positional arguments are given than the command takes."""

    reason = "command contains too many arguments"


class SandboxNotInstalledError(SandboxError):
    """Raised when the sandbox tool or its node runtime cannot be found."""


class SandboxExecError(SandboxError):
    """Raised when the sandbox tool cannot be run or its output cannot be read."""

    def __init__(
        self,
        message: str,
        cmd: list[str] | None = None,
        returncode: int | None = None,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        self.cmd = cmd or []
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(message)


class SandboxOutputError(SandboxError):
    """Raised when the sandbox tool reports an error in its structured output.

    The parsed output is kept so callers can still show the transcript.
    """

    def __init__(self, message: str, output: SandboxOutput) -> None:
        self.output = output
        super().__init__(message)
