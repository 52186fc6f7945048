"""Platform abstraction layer."""

from .process import (
    CommandRunner,
    ExecResult,
    ProcessFailure,
    ProcessRunner,
    SpawnError,
    WaitError,
)

__all__ = [
    "CommandRunner",
    "ExecResult",
    "ProcessFailure",
    "ProcessRunner",
    "SpawnError",
    "WaitError",
]
