"""Run one external command inside a directory and capture its stdout.

This is the only place that spawns child processes. Everything above it
works with ``ExecResult`` values and never sees pipes or wait statuses.

Usage:
    runner = ProcessRunner()
    result = runner.run(repo_path, "git", ["diff-files", "--quiet"])
    if not result.ok:
        print("working tree differs from the index")
"""

from __future__ import annotations

import shlex
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from pending.core.errors import ErrorCode
from pending.output.console import ConsoleProtocol

__all__ = [
    "CommandRunner",
    "ExecResult",
    "ProcessFailure",
    "ProcessRunner",
    "SpawnError",
    "WaitError",
]


@dataclass(frozen=True, slots=True)
class ExecResult:
    """Outcome of one command.

    Attributes:
        status: 0 if the child exited normally with status 0, otherwise 1
        output: Everything the child wrote to standard output
    """

    status: int
    output: bytes = b""

    @property
    def ok(self) -> bool:
        """True if the command succeeded."""
        return self.status == 0

    @property
    def empty(self) -> bool:
        """True if the command wrote nothing to standard output."""
        return len(self.output) == 0

    @property
    def text(self) -> str:
        """Decoded output with trailing whitespace removed."""
        return self.output.decode("utf-8", errors="surrogateescape").rstrip()


class CommandRunner(Protocol):
    """Anything that can run a command in a directory and report the outcome."""

    def run(self, cwd: Path, command: str, args: Sequence[str]) -> ExecResult: ...


class ProcessFailure(Exception):
    """The environment cannot run child processes at all.

    Not recoverable: the CLI prints ``message`` and exits with ``exit_code``.
    """

    exit_code: ErrorCode = ErrorCode.SPAWN_ERROR

    def __init__(self, command: Sequence[str], message: str) -> None:
        super().__init__(message)
        self.command = tuple(command)
        self.message = message

    def __str__(self) -> str:
        return f"{self.command[0]}: {self.message}" if self.command else self.message


class SpawnError(ProcessFailure):
    """The child process could not be started."""

    exit_code = ErrorCode.SPAWN_ERROR


class WaitError(ProcessFailure):
    """The child process could not be waited on."""

    exit_code = ErrorCode.WAIT_ERROR


class ProcessRunner:
    """Synchronous "run and capture" for external commands.

    In normal operation the child's stderr is discarded. In verbose mode it
    stays attached to ours, and each command is traced on ``console``
    before it runs.

    Args:
        verbose: Enable diagnostic mode
        console: Diagnostic console (typically stderr); required for tracing
    """

    def __init__(self, *, verbose: bool = False, console: ConsoleProtocol | None = None) -> None:
        self._verbose = verbose
        self._console = console

    def run(self, cwd: Path, command: str, args: Sequence[str]) -> ExecResult:
        """Run ``command`` with ``args`` in ``cwd`` and wait for it.

        Args:
            cwd: Working directory for the child
            command: Executable name, looked up on PATH
            args: Arguments after the executable

        Returns:
            ExecResult with the normalised exit status and captured stdout.
            A working directory that cannot be entered yields status 1.

        Raises:
            SpawnError: The executable could not be started
            WaitError: The child could not be waited on
        """
        cmd = [command, *args]
        self._trace(f"dir: {cwd}")
        self._trace(f"cmd: {shlex.join(cmd)}")

        try:
            proc = subprocess.Popen(
                cmd,
                cwd=str(cwd),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=None if self._verbose else subprocess.DEVNULL,
            )
        except OSError as e:
            if e.filename is not None and str(e.filename) == str(cwd):
                # Directory vanished or is unreadable; report like a failed command.
                self._trace(f"failed to cd into {cwd}: {e.strerror or e}")
                return ExecResult(status=1)
            raise SpawnError(cmd, e.strerror or str(e)) from e

        assert proc.stdout is not None
        try:
            output = proc.stdout.read()
        finally:
            proc.stdout.close()
        self._trace(f"empty stdout: {len(output) == 0}")

        try:
            returncode = proc.wait()
        except OSError as e:
            raise WaitError(cmd, e.strerror or str(e)) from e

        return ExecResult(status=0 if returncode == 0 else 1, output=output)

    def _trace(self, message: str) -> None:
        if self._verbose and self._console is not None:
            self._console.debug(message)
