"""Git implementation of the status checker.

Each query shells out to git and reads only the exit status or whether
anything was printed. Failures are information, not errors: a repository
without an upstream simply has nothing unpushed.

Usage:
    checker = GitChecker(Path("~/src/project").expanduser(), ProcessRunner())
    if checker.has_untracked():
        print("untracked files")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pending.core.result import Err, Ok, Result
from pending.platform.process import CommandRunner, ExecResult

__all__ = ["GitChecker", "GitError", "is_repository"]


@dataclass(frozen=True, slots=True)
class GitError:
    """A git query in a multi-step answer failed or printed nothing.

    Attributes:
        command: The git arguments that were run
        status: Normalised exit status (0 if the query succeeded but was empty)
    """

    command: tuple[str, ...]
    status: int

    def __str__(self) -> str:
        return f"git {' '.join(self.command)} failed (exit {self.status})"


def is_repository(path: Path) -> bool:
    """True if ``path`` directly contains a ``.git`` directory."""
    return (path / ".git").is_dir()


class GitChecker:
    """Answers pending-work questions for one Git repository.

    Attributes:
        path: Repository root (contains ``.git/``)
    """

    __slots__ = ("_git", "_path", "_runner")

    def __init__(self, path: Path, runner: CommandRunner, *, git: str = "git") -> None:
        """Initialize checker.

        Args:
            path: Path to repository root (containing .git)
            runner: Process runner used for every query
            git: Git executable
        """
        self._path = path
        self._runner = runner
        self._git = git

    @property
    def path(self) -> Path:
        return self._path

    def __repr__(self) -> str:
        return f"GitChecker({str(self._path)!r})"

    def has_uncommitted(self) -> bool:
        return not self._run("diff-index", "--cached", "--quiet", "HEAD").ok

    def has_unstaged(self) -> bool:
        return not self._run("diff-files", "--quiet").ok

    def has_untracked(self) -> bool:
        # ls-files can fail after printing; any output counts.
        return not self._run("ls-files", "-o", "--exclude-standard").empty

    def has_unpushed(self) -> bool:
        """Compare the current branch's commit with its upstream's.

        Detached HEAD, a missing upstream or any failing step all answer
        False.
        """
        match self._local_and_upstream():
            case Ok((local_rev, remote_rev)):
                return local_rev != remote_rev
            case Err(_):
                return False

    def _local_and_upstream(self) -> Result[tuple[str, str], GitError]:
        local_ref = self._capture("symbolic-ref", "HEAD")
        if isinstance(local_ref, Err):
            return local_ref
        local_name = local_ref.value

        local_rev = self._capture("rev-parse", local_name)
        if isinstance(local_rev, Err):
            return local_rev

        remote_rev = self._capture(
            "for-each-ref", "--format=%(upstream:short)", local_name
        ).flat_map(lambda remote_name: self._capture("rev-parse", remote_name))
        return remote_rev.map(lambda rev: (local_rev.value, rev))

    def _capture(self, *args: str) -> Result[str, GitError]:
        """Run a query whose stripped output must be non-empty."""
        result = self._run(*args)
        text = result.text if result.ok else ""
        if not text:
            return Err(GitError(command=args, status=result.status))
        return Ok(text)

    def _run(self, *args: str) -> ExecResult:
        return self._runner.run(self._path, self._git, list(args))
