"""Depth-first search for repositories.

A directory holding a ``.git`` directory is a repository root: it is
handed to the reporter and its contents are never visited. Any other
directory is searched through its immediate subdirectories, in name order.
The first error stops the walk.
"""

from __future__ import annotations

import os
from pathlib import Path

from pending.core.errors import ErrorCode
from pending.core.mode import Mode
from pending.core.result import Err, Ok, Result
from pending.output.console import ConsoleProtocol
from pending.services.reporter import Reporter
from pending.vcs.checker import CheckerFactory
from pending.vcs.git import is_repository

__all__ = ["TreeWalker", "list_subdirectories"]


def list_subdirectories(path: Path) -> Result[list[Path], OSError]:
    """List the immediate subdirectories of ``path``, sorted by name.

    Entries are classified by their directory-entry type: a symlink to a
    directory is not a subdirectory.
    """
    children: list[Path] = []
    try:
        with os.scandir(path) as entries:
            for entry in entries:
                try:
                    is_dir = entry.is_dir(follow_symlinks=False)
                except OSError:
                    is_dir = False
                if is_dir:
                    children.append(path / entry.name)
    except OSError as e:
        return Err(e)

    return Ok(sorted(children, key=lambda p: p.name))


class TreeWalker:
    """Walks directory trees and reports every repository found.

    Args:
        reporter: Receives each repository root with its checker
        checker_factory: Builds a checker for a repository root
        console: Error console for unreadable paths
    """

    def __init__(
        self,
        *,
        reporter: Reporter,
        checker_factory: CheckerFactory,
        console: ConsoleProtocol,
    ) -> None:
        self._reporter = reporter
        self._checker_factory = checker_factory
        self._console = console

    def walk(self, path: Path, mode: Mode) -> int:
        """Search ``path`` and everything below it.

        Directories are visited depth-first in name order using an explicit
        stack.

        Returns:
            0 when the whole tree was searched, otherwise the exit code of
            the first failure (later siblings are not visited).
        """
        stack = [path]
        while stack:
            match self.visit(stack.pop(), mode):
                case Err(code):
                    return code
                case Ok(children):
                    # Reversed so the first name is popped first.
                    stack.extend(reversed(children))
        return int(ErrorCode.OK)

    def visit(self, path: Path, mode: Mode) -> Result[list[Path], int]:
        """Handle one directory.

        A repository root is reported and yields no children; any other
        directory yields its subdirectories.

        Returns:
            Ok(subdirectories to search next) or Err(exit code)
        """
        try:
            path.stat()
        except OSError as e:
            self._report_os_error(path, e)
            return Err(int(ErrorCode.IO_ERROR))

        if is_repository(path):
            self._reporter.report(path, self._checker_factory(path), mode)
            return Ok([])

        match list_subdirectories(path):
            case Err(e):
                self._report_os_error(path, e)
                return Err(int(ErrorCode.IO_ERROR))
            case Ok(children):
                return Ok(children)

    def _report_os_error(self, path: Path, error: OSError) -> None:
        self._console.error(f"{path}: {error.strerror or error}")
