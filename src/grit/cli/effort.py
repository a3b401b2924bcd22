"""Effort command: commits and active days per file."""

import datetime as dt
from pathlib import Path
from typing import Optional

import typer

from .. import api
from . import app
from ._common import (
    DATE_FORMATS,
    csv_list,
    handle_errors,
    repo_path,
    reporter_for,
    resolve_bounds,
    resolve_config,
)
from ._output import EFFORT_HEADER, effort_rows, print_effort_table, write_csv


@app.command()
def effort(
    ctx: typer.Context,
    start_date: Optional[dt.datetime] = typer.Option(
        None,
        "--start-date",
        help="Start date (YYYY-MM-DD); ignored when no commit is on or after it",
        formats=DATE_FORMATS,
    ),
    end_date: Optional[dt.datetime] = typer.Option(
        None,
        "--end-date",
        help="End date (YYYY-MM-DD); ignored when no commit is on or before it",
        formats=DATE_FORMATS,
    ),
    start_days_back: Optional[int] = typer.Option(
        None,
        "--start-days-back",
        help="Collect data from this many days ago; ignored when no commit is that recent",
        min=0,
    ),
    end_days_back: Optional[int] = typer.Option(
        None, "--end-days-back", help="Collect data up to this many days ago", min=0
    ),
    include: Optional[str] = typer.Option(
        None, "--include", help="Comma-delimited globs to include: path1/*,path2/*"
    ),
    exclude: Optional[str] = typer.Option(
        None, "--exclude", help="Comma-delimited globs to exclude: path1/*,path2/*"
    ),
    threads: Optional[int] = typer.Option(
        None, "--threads", "-t", help="Concurrent blame workers (default: 10)", min=1
    ),
    table: bool = typer.Option(False, "--table", help="Display as a table to stdout"),
    file: Optional[Path] = typer.Option(
        None, "--file", help="Write CSV to this file instead of stdout", dir_okay=False
    ),
):
    """
    Distinct commits and active days behind each file's current lines.

    [bold cyan]Examples:[/bold cyan]

      grit effort --table

      grit effort --start-days-back 90 --include "src/*"

    A date bound that no commit satisfies is ignored (with a warning).
    """
    start, end = resolve_bounds(start_date, end_date, start_days_back, end_days_back)

    with handle_errors():
        config = resolve_config(
            ctx, include=csv_list(include), exclude=csv_list(exclude), threads=threads
        )
        records = reporter_for(config).run(
            "Measuring effort",
            lambda on_progress: api.effort(
                repo_path(ctx), start, end, config=config, on_progress=on_progress
            ),
        )

    if table:
        print_effort_table(records)
    else:
        write_csv(EFFORT_HEADER, effort_rows(records), file)
