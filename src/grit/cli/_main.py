"""Global options shared by every subcommand."""

from pathlib import Path
from typing import Optional

import typer

from ..logging_config import setup_logging
from . import app
from ._common import console


def _version_callback(value: bool) -> None:
    if value:
        from .. import __version__

        console.print(f"[bold cyan]grit[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)


@app.callback()
def main(
    ctx: typer.Context,
    path: Optional[Path] = typer.Option(
        None,
        "-C",
        "--path",
        help="Repository to analyze (default: current directory)",
        exists=True,
        file_okay=False,
        dir_okay=True,
        readable=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Only log errors and hide the progress bar"
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", help="Also append log records to this file"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """
    Analyze authorship and activity of a git repository.

    [bold cyan]Examples:[/bold cyan]

      grit fame --sort loc

      grit bydate --start-date 2020-03-01 --ignore-weekends

      grit effort --include "src/*" --table

      grit -C /path/to/repo byfile --in-file README.md
    """
    ctx.ensure_object(dict)
    ctx.obj["path"] = path.resolve() if path else Path.cwd()
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config"] = config
    ctx.obj["log_file"] = str(log_file) if log_file else None

    setup_logging(verbose=verbose, quiet=quiet, log_file=str(log_file) if log_file else None)
