"""Repository status checker protocol.

A checker answers four yes/no questions about one repository. Only Git is
implemented; another backend only needs these four methods for the walker
and reporter to work with it unchanged.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

__all__ = ["CheckerFactory", "VcsChecker"]


class VcsChecker(Protocol):
    """Queries about pending work in a single repository."""

    @property
    def path(self) -> Path: ...

    def has_uncommitted(self) -> bool:
        """True if the index differs from the last commit."""
        ...

    def has_unstaged(self) -> bool:
        """True if the working tree differs from the index."""
        ...

    def has_untracked(self) -> bool:
        """True if there are files that are neither tracked nor ignored."""
        ...

    def has_unpushed(self) -> bool:
        """True if the current branch and its upstream point at different commits."""
        ...


class CheckerFactory(Protocol):
    """Builds a checker for a directory known to be a repository root."""

    def __call__(self, path: Path) -> VcsChecker: ...
