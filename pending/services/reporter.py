"""Turn checker answers into printed findings.

Findings for a repository always come out in the same order (uncommitted,
untracked, unstaged, unpushed) and are printed as soon as each check
answers, one ``<path> <message>`` line per finding.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path

from pending.core.mode import Mode
from pending.output.console import ConsoleProtocol
from pending.vcs.checker import VcsChecker

__all__ = ["CHECKS", "Finding", "Reporter", "iter_findings"]


@dataclass(frozen=True, slots=True)
class Finding:
    """One kind of pending work found in one repository."""

    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.path} {self.message}"


@dataclass(frozen=True, slots=True)
class Check:
    kind: Mode
    message: str
    query: Callable[[VcsChecker], bool]


CHECKS: tuple[Check, ...] = (
    Check(Mode.UNCOMMITTED, "has uncommitted changes", lambda c: c.has_uncommitted()),
    Check(Mode.UNTRACKED, "has untracked changes", lambda c: c.has_untracked()),
    Check(Mode.UNSTAGED, "has unstaged changes", lambda c: c.has_unstaged()),
    Check(Mode.UNPUSHED, "has unpushed changes", lambda c: c.has_unpushed()),
)


def iter_findings(path: Path, checker: VcsChecker, mode: Mode) -> Iterator[Finding]:
    """Yield findings for ``path`` lazily.

    A check is only run when its kind is selected in ``mode``.
    """
    for check in CHECKS:
        if mode.enabled(check.kind) and check.query(checker):
            yield Finding(path=path, message=check.message)


class Reporter:
    """Prints findings to the output console."""

    def __init__(self, console: ConsoleProtocol) -> None:
        self._console = console

    def report(self, path: Path, checker: VcsChecker, mode: Mode) -> int:
        """Run the selected checks and print each finding.

        Returns:
            Number of findings printed
        """
        count = 0
        for finding in iter_findings(path, checker, mode):
            self._console.print(str(finding))
            count += 1
        return count
