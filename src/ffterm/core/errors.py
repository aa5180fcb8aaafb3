"""
Exception hierarchy for ffterm.

Command failures carry the argv that was spawned so callers can
report what went wrong without re-deriving it.
"""

from typing import List, Optional


class FFTermError(Exception):
    """Base class for all ffterm errors."""


class ConfigError(FFTermError):
    """Configuration file could not be read or validated."""


class CommandError(FFTermError):
    """Base class for errors raised while running a command."""

    def __init__(self, message: str, argv: Optional[List[str]] = None):
        super().__init__(message)
        self.argv = list(argv or [])

    @property
    def program(self) -> str:
        return self.argv[0] if self.argv else ""


class CommandStartError(CommandError):
    """The child process could not be created."""

    def __init__(self, argv: List[str], error: OSError):
        super().__init__(f"Failed to start command: {error}", argv)
        self.error = error


class CommandFailedError(CommandError):
    """The child exited with a non-zero code and strict mode was requested."""

    def __init__(
        self,
        argv: List[str],
        exit_code: int,
        stderr: str = "",
        stdout: str = "",
    ):
        super().__init__(f"Command failed with code {exit_code}: {stderr}", argv)
        self.exit_code = exit_code
        self.stderr = stderr
        self.stdout = stdout


class CommandTimeoutError(CommandError):
    """The child did not finish before its deadline and was killed."""

    def __init__(self, argv: List[str], timeout: float):
        super().__init__(f"Command timed out after {timeout}s", argv)
        self.timeout = timeout
