"""Fame command: authorship distribution per author."""

import datetime as dt
from pathlib import Path
from typing import Optional

import click
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
from ._output import FAME_HEADER, fame_rows, print_fame_table, write_csv


@app.command()
def fame(
    ctx: typer.Context,
    sort: Optional[str] = typer.Option(
        None,
        "--sort",
        "-s",
        help="Sort field: commits (default), loc or files",
        click_type=click.Choice(["commit", "commits", "loc", "files"], case_sensitive=False),
    ),
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
    restrict_author: Optional[str] = typer.Option(
        None, "--restrict-author", help="Comma-delimited author names to leave out"
    ),
    threads: Optional[int] = typer.Option(
        None, "--threads", "-t", help="Concurrent blame workers (default: 10)", min=1
    ),
    table: bool = typer.Option(False, "--table", help="Display as a table instead of CSV"),
    file: Optional[Path] = typer.Option(
        None, "--file", help="Write CSV to this file instead of stdout", dir_okay=False
    ),
):
    """
    Lines, commits and files attributed to each author by git blame.

    [bold cyan]Examples:[/bold cyan]

      grit fame

      grit fame --sort loc --table

      grit fame --start-date 2020-01-01 --exclude "docs/*" --restrict-author "Bot"

    A date bound that no commit satisfies is ignored (with a warning), so a
    start date after the last commit reports the whole history. A window
    holding no commit between two resolved bounds reports nothing.
    """
    start, end = resolve_bounds(start_date, end_date, start_days_back, end_days_back)

    with handle_errors():
        config = resolve_config(
            ctx,
            sort=sort,
            include=csv_list(include),
            exclude=csv_list(exclude),
            restrict_authors=csv_list(restrict_author),
            threads=threads,
        )
        stats = reporter_for(config).run(
            "Blaming files",
            lambda on_progress: api.fame(
                repo_path(ctx), start, end, config=config, on_progress=on_progress
            ),
        )

    if table:
        print_fame_table(stats)
    else:
        write_csv(FAME_HEADER, fame_rows(stats), file)
