"""Version-control backends.

Usage:
    from pending.vcs import GitChecker, is_repository

    if is_repository(path):
        checker = GitChecker(path, runner)
        print(checker.has_unpushed())
"""

from pending.vcs.checker import CheckerFactory, VcsChecker
from pending.vcs.git import GitChecker, GitError, is_repository

__all__ = [
    "CheckerFactory",
    "GitChecker",
    "GitError",
    "VcsChecker",
    "is_repository",
]
