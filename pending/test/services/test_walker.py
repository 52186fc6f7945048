"""Tests for pending.services.walker."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

from pending.core.errors import ErrorCode
from pending.core.mode import Mode
from pending.core.result import Err, Ok, Result
from pending.output.console import MockConsole
from pending.services.reporter import Reporter
from pending.services.walker import TreeWalker, list_subdirectories
from pending.vcs.checker import VcsChecker


class StubChecker:
    def __init__(self, path: Path, dirty: bool) -> None:
        self._path = path
        self._dirty = dirty

    @property
    def path(self) -> Path:
        return self._path

    def has_uncommitted(self) -> bool:
        return False

    def has_unstaged(self) -> bool:
        return False

    def has_untracked(self) -> bool:
        return self._dirty

    def has_unpushed(self) -> bool:
        return False


class RecordingFactory:
    """Builds stub checkers and remembers every repository it was asked for."""

    def __init__(self, dirty: bool = True) -> None:
        self.dirty = dirty
        self.paths: list[Path] = []

    def __call__(self, path: Path) -> VcsChecker:
        self.paths.append(path)
        return StubChecker(path, self.dirty)


class RecordingWalker(TreeWalker):
    """Records every path walked; optionally fails on chosen paths."""

    def __init__(self, *, fail_on: set[Path] | None = None, **kwargs: object) -> None:
        super().__init__(**kwargs)  # type: ignore[arg-type]
        self.visited: list[Path] = []
        self.fail_on = fail_on or set()

    def visit(self, path: Path, mode: Mode) -> Result[list[Path], int]:
        self.visited.append(path)
        if path in self.fail_on:
            return Err(7)
        return super().visit(path, mode)


def _make_repo(path: Path) -> Path:
    (path / ".git").mkdir(parents=True)
    return path


def _walker(
    factory: RecordingFactory,
    output: MockConsole,
    errors: MockConsole,
    *,
    fail_on: set[Path] | None = None,
) -> RecordingWalker:
    return RecordingWalker(
        reporter=Reporter(output),
        checker_factory=factory,
        console=errors,
        fail_on=fail_on,
    )


class TestListSubdirectories:
    def test_sorted_directories_only(self, tmp_path: Path) -> None:
        (tmp_path / "b").mkdir()
        (tmp_path / "a").mkdir()
        (tmp_path / "file.txt").write_text("x")

        assert list_subdirectories(tmp_path) == Ok([tmp_path / "a", tmp_path / "b"])

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges")
    def test_symlinked_directory_is_skipped(self, tmp_path: Path) -> None:
        target = tmp_path / "real"
        target.mkdir()
        (tmp_path / "link").symlink_to(target, target_is_directory=True)

        assert list_subdirectories(tmp_path) == Ok([target])

    def test_missing_directory(self, tmp_path: Path) -> None:
        result = list_subdirectories(tmp_path / "missing")

        assert isinstance(result, Err)
        assert isinstance(result.error, FileNotFoundError)


class TestTreeWalker:
    def test_repository_root_is_checked_once(self, tmp_path: Path) -> None:
        repo = _make_repo(tmp_path / "repo")
        factory = RecordingFactory()
        output = MockConsole()

        code = _walker(factory, output, MockConsole()).walk(repo, Mode.ANY)

        assert code == 0
        assert factory.paths == [repo]
        assert output.messages == [f"{repo} has untracked changes"]

    def test_does_not_descend_into_repository(self, tmp_path: Path) -> None:
        repo = _make_repo(tmp_path / "outer")
        _make_repo(repo / "nested")
        _make_repo(repo / ".git" / "modules" / "sub")
        factory = RecordingFactory()
        walker = _walker(factory, MockConsole(), MockConsole())

        assert walker.walk(tmp_path, Mode.ANY) == 0

        assert factory.paths == [repo]
        assert walker.visited == [tmp_path, repo]

    def test_every_child_directory_visited_once(self, tmp_path: Path) -> None:
        for name in ("c", "a", "b"):
            (tmp_path / name / "inner").mkdir(parents=True)
        (tmp_path / "notes.txt").write_text("x")
        factory = RecordingFactory()
        walker = _walker(factory, MockConsole(), MockConsole())

        assert walker.walk(tmp_path, Mode.ANY) == 0

        assert factory.paths == []
        assert walker.visited == [
            tmp_path,
            tmp_path / "a",
            tmp_path / "a" / "inner",
            tmp_path / "b",
            tmp_path / "b" / "inner",
            tmp_path / "c",
            tmp_path / "c" / "inner",
        ]

    def test_finds_repositories_depth_first(self, tmp_path: Path) -> None:
        first = _make_repo(tmp_path / "a" / "deep" / "one")
        second = _make_repo(tmp_path / "b")
        factory = RecordingFactory()
        output = MockConsole()

        assert _walker(factory, output, MockConsole()).walk(tmp_path, Mode.ANY) == 0

        assert factory.paths == [first, second]
        assert output.messages == [
            f"{first} has untracked changes",
            f"{second} has untracked changes",
        ]

    def test_git_file_is_not_a_repository(self, tmp_path: Path) -> None:
        sub = tmp_path / "sub"
        sub.mkdir()
        (sub / ".git").write_text("gitdir: ../.git/modules/sub")
        factory = RecordingFactory()

        assert _walker(factory, MockConsole(), MockConsole()).walk(tmp_path, Mode.ANY) == 0
        assert factory.paths == []

    def test_mode_is_passed_to_reporter(self, tmp_path: Path) -> None:
        repo = _make_repo(tmp_path / "repo")
        output = MockConsole()

        _walker(RecordingFactory(), output, MockConsole()).walk(repo, Mode.UNPUSHED)

        assert output.outputs == []

    def test_missing_path_is_io_error(self, tmp_path: Path) -> None:
        errors = MockConsole()
        factory = RecordingFactory()

        code = _walker(factory, MockConsole(), errors).walk(tmp_path / "missing", Mode.ANY)

        assert code == int(ErrorCode.IO_ERROR)
        assert errors.has_error()
        assert errors.find(str(tmp_path / "missing"))
        assert factory.paths == []

    def test_failure_stops_remaining_siblings(self, tmp_path: Path) -> None:
        for name in ("a", "b", "c"):
            _make_repo(tmp_path / name)
        factory = RecordingFactory()
        walker = _walker(factory, MockConsole(), MockConsole(), fail_on={tmp_path / "b"})

        code = walker.walk(tmp_path, Mode.ANY)

        assert code == 7
        assert factory.paths == [tmp_path / "a"]
        assert tmp_path / "c" not in walker.visited

    def test_unlistable_directory_is_io_error(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        locked = tmp_path / "locked"
        locked.mkdir()
        real_scandir = os.scandir

        def scandir(path: Path) -> object:
            if Path(path) == locked:
                raise PermissionError(13, "Permission denied", str(path))
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", scandir)
        errors = MockConsole()

        code = _walker(RecordingFactory(), MockConsole(), errors).walk(tmp_path, Mode.ANY)

        assert code == int(ErrorCode.IO_ERROR)
        assert errors.messages == [f"error: {locked}: Permission denied"]

    def test_deep_tree_beyond_recursion_limit(self, tmp_path: Path) -> None:
        depth = 1200
        leaf = tmp_path
        for _ in range(depth):
            leaf = leaf / "d"
        repo = _make_repo(leaf)
        factory = RecordingFactory()
        walker = _walker(factory, MockConsole(), MockConsole())

        assert walker.walk(tmp_path, Mode.ANY) == 0

        assert factory.paths == [repo]
        assert len(walker.visited) == depth + 1

    def test_failure_deep_in_first_branch_skips_later_branches(self, tmp_path: Path) -> None:
        (tmp_path / "a" / "x").mkdir(parents=True)
        later = _make_repo(tmp_path / "b")
        factory = RecordingFactory()
        walker = _walker(factory, MockConsole(), MockConsole(), fail_on={tmp_path / "a" / "x"})

        assert walker.walk(tmp_path, Mode.ANY) == 7

        assert factory.paths == []
        assert later not in walker.visited
