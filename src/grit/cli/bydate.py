"""By-date command: commits per day."""

import datetime as dt
from pathlib import Path
from typing import Optional

import typer

from .. import api
from . import app
from ._common import (
    DATE_FORMATS,
    handle_errors,
    repo_path,
    resolve_bounds,
    resolve_config,
)
from ._output import BYDATE_HEADER, bydate_rows, print_bydate_table, write_csv


@app.command()
def bydate(
    ctx: typer.Context,
    start_date: Optional[dt.datetime] = typer.Option(
        None, "--start-date", help="Start date (YYYY-MM-DD)", formats=DATE_FORMATS
    ),
    end_date: Optional[dt.datetime] = typer.Option(
        None, "--end-date", help="End date (YYYY-MM-DD)", formats=DATE_FORMATS
    ),
    start_days_back: Optional[int] = typer.Option(
        None, "--start-days-back", help="Collect data from this many days ago", min=0
    ),
    end_days_back: Optional[int] = typer.Option(
        None, "--end-days-back", help="Collect data up to this many days ago", min=0
    ),
    ignore_weekends: bool = typer.Option(
        False, "--ignore-weekends", help="Ignore weekends when counting commits"
    ),
    ignore_gap_fill: bool = typer.Option(
        False, "--ignore-gap-fill", help="Do not fill empty dates with 0 commits"
    ),
    table: bool = typer.Option(False, "--table", help="Display as a table to stdout"),
    file: Optional[Path] = typer.Option(
        None, "--file", help="Write CSV to this file instead of stdout", dir_okay=False
    ),
):
    """
    Number of commits per day, ending with a Total row.

    [bold cyan]Examples:[/bold cyan]

      grit bydate

      grit bydate --start-date 2020-03-01 --ignore-weekends --file commits.csv
    """
    start, end = resolve_bounds(start_date, end_date, start_days_back, end_days_back)

    with handle_errors():
        config = resolve_config(
            ctx,
            ignore_weekends=True if ignore_weekends else None,
            fill_gaps=False if ignore_gap_fill else None,
        )
        buckets = api.by_date(repo_path(ctx), start, end, config=config)

    if table:
        print_bydate_table(buckets)
    else:
        write_csv(BYDATE_HEADER, bydate_rows(buckets), file)
