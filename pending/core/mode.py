"""Selection of which kinds of pending work to look for."""

from __future__ import annotations

from enum import Flag, auto

__all__ = ["Mode"]


class Mode(Flag):
    """Set of checks to run against each repository.

    ``ANY`` is the union of the four check kinds. A mode is an ordinary
    value passed down to the walker and reporter.
    """

    NONE = 0
    UNCOMMITTED = auto()
    UNTRACKED = auto()
    UNSTAGED = auto()
    UNPUSHED = auto()
    ANY = UNCOMMITTED | UNTRACKED | UNSTAGED | UNPUSHED

    @classmethod
    def from_flags(
        cls,
        *,
        uncommitted: bool = False,
        untracked: bool = False,
        unstaged: bool = False,
        unpushed: bool = False,
        any_: bool = False,
    ) -> Mode:
        """Build a mode from individual CLI switches.

        ``any_`` sets the full mask regardless of the other switches.
        """
        if any_:
            return cls.ANY

        mode = cls.NONE
        if uncommitted:
            mode |= cls.UNCOMMITTED
        if untracked:
            mode |= cls.UNTRACKED
        if unstaged:
            mode |= cls.UNSTAGED
        if unpushed:
            mode |= cls.UNPUSHED
        return mode

    def enabled(self, check: Mode) -> bool:
        """True if every bit of ``check`` is selected in this mode."""
        return check is not Mode.NONE and (self & check) == check
