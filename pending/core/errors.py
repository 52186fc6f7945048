"""Error codes for CLI exit status.

These values are used as process exit codes and should remain stable.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for the `pending` command.

    - 0: Scan finished (findings may have been printed)
    - 1: I/O error (a scanned path could not be stat'ed or listed)
    - 2: Usage error (unknown flag, invalid environment settings)
    - 3: A child process could not be spawned
    - 4: A child process could not be waited on
    """

    OK = 0
    IO_ERROR = 1
    USAGE_ERROR = 2
    SPAWN_ERROR = 3
    WAIT_ERROR = 4

    def __str__(self) -> str:
        """Return human-readable name."""
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        """Check if this code indicates success."""
        return self == ErrorCode.OK
