from __future__ import annotations

from pathlib import Path

import typer

from pending import __version__
from pending.cli.context import build_context
from pending.core.errors import ErrorCode
from pending.core.mode import Mode
from pending.platform.process import ProcessFailure


app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=int(ErrorCode.OK))


@app.command()
def scan(
    dirs: list[Path] | None = typer.Argument(
        None,
        help="Directories to search (default: current directory).",
        show_default=False,
    ),
    uncommitted: bool = typer.Option(
        False, "-c", "--uncommitted", help="List repositories with uncommitted changes."
    ),
    untracked: bool = typer.Option(
        False, "-t", "--untracked", help="List repositories with untracked changes."
    ),
    unstaged: bool = typer.Option(
        False, "-s", "--unstaged", help="List repositories with unstaged changes."
    ),
    unpushed: bool = typer.Option(
        False, "-p", "--unpushed", help="List repositories with unpushed changes."
    ),
    any_: bool = typer.Option(
        False, "-a", "--any", help="List repositories with any pending work (default)."
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Trace every git command on stderr."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_show_version,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Find Git repositories with pending work."""
    mode = Mode.from_flags(
        uncommitted=uncommitted,
        untracked=untracked,
        unstaged=unstaged,
        unpushed=unpushed,
        any_=any_,
    )
    if mode is Mode.NONE:
        mode = Mode.ANY

    ctx = build_context(verbose=verbose)
    roots = dirs or [Path(".")]

    try:
        for root in roots:
            code = ctx.walker.walk(root, mode)
            if code != 0:
                raise typer.Exit(code=code)
    except ProcessFailure as e:
        ctx.err_console.error(str(e))
        raise typer.Exit(code=int(e.exit_code))


def main() -> None:
    app()
