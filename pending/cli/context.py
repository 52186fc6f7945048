from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from pending.core.config import Config, load_config
from pending.core.errors import ErrorCode
from pending.core.result import Err
from pending.output.console import ConsoleProtocol, RichConsole
from pending.platform.process import ProcessRunner
from pending.services.reporter import Reporter
from pending.services.walker import TreeWalker
from pending.vcs.checker import VcsChecker
from pending.vcs.git import GitChecker


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    console: ConsoleProtocol
    err_console: ConsoleProtocol
    walker: TreeWalker


def build_context(*, verbose: bool = False) -> CLIContext:
    config_result = load_config()
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.USAGE_ERROR))

    loaded = config_result.value
    config = Config(git=loaded.git, verbose=loaded.verbose or verbose)
    console = RichConsole()
    err_console = RichConsole(stderr=True)
    return CLIContext(
        config=config,
        console=console,
        err_console=err_console,
        walker=build_walker(config, console=console, err_console=err_console),
    )


def build_walker(
    config: Config,
    *,
    console: ConsoleProtocol,
    err_console: ConsoleProtocol,
) -> TreeWalker:
    runner = ProcessRunner(verbose=config.verbose, console=err_console)

    def git_checker(path: Path) -> VcsChecker:
        return GitChecker(path, runner, git=config.git)

    return TreeWalker(
        reporter=Reporter(console),
        checker_factory=git_checker,
        console=err_console,
    )
