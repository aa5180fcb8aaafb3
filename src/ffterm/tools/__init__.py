"""
Tools Module - Process execution

Runs external commands with capture, optional live output,
and a caller-selected error policy.
"""

from .runner import (
    CommandResult,
    CommandRunner,
    ExecutionRequest,
    RunOptions,
)

__all__ = [
    "CommandResult",
    "CommandRunner",
    "ExecutionRequest",
    "RunOptions",
]
