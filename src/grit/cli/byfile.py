"""By-file command: lines of one file per author and day."""

from pathlib import Path
from typing import Optional

import typer

from .. import api
from . import app
from ._common import csv_list, handle_errors, repo_path, resolve_config
from ._output import BYFILE_HEADER, byfile_rows, write_csv


@app.command()
def byfile(
    ctx: typer.Context,
    in_file: str = typer.Option(
        ..., "--in-file", help="File to blame, relative to the repository root"
    ),
    restrict_author: Optional[str] = typer.Option(
        None, "--restrict-author", help="Comma-delimited author names to leave out"
    ),
    file: Optional[Path] = typer.Option(
        None, "--file", help="Write CSV to this file instead of stdout", dir_okay=False
    ),
):
    """
    Blamed lines of a single file grouped by author and commit day.

    [bold cyan]Examples:[/bold cyan]

      grit byfile --in-file src/main.py

      grit byfile --in-file README.md --restrict-author "Bot" --file readme.csv
    """
    with handle_errors():
        config = resolve_config(ctx, restrict_authors=csv_list(restrict_author))
        rows = api.by_file(in_file, repo_path(ctx), config=config)

    write_csv(BYFILE_HEADER, byfile_rows(rows), file)
