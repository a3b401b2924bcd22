"""Shared CLI helpers."""

from __future__ import annotations

import contextlib
import datetime as dt
from collections.abc import Iterator
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..analysis.calendar import day_end, day_start
from ..config import GritConfig, load_config, split_csv
from ..core.progress import ProgressReporter, SilentReporter
from ..exceptions import ConfigurationError, FilterPatternError, GritError
from ..logging_config import setup_logging

console = Console()
err_console = Console(stderr=True)

DATE_FORMATS = ["%Y-%m-%d"]

EXIT_FAILURE = 1
EXIT_USAGE = 2


def resolve_config(ctx: typer.Context, **overrides) -> GritConfig:
    """Build the run configuration from the global options plus command flags.

    Logging is reconfigured from the resolved ``verbosity``, so
    ``GRIT_VERBOSITY`` and config files apply when no flag was given.
    """
    obj = ctx.obj or {}
    config = load_config(
        config_file=obj.get("config"),
        verbose=obj.get("verbose", False),
        quiet=obj.get("quiet", False),
        **overrides,
    )
    setup_logging(
        verbose=config.verbosity == "verbose",
        quiet=config.verbosity == "quiet",
        log_file=obj.get("log_file"),
    )
    return config


def repo_path(ctx: typer.Context) -> Path:
    obj = ctx.obj or {}
    return obj.get("path") or Path.cwd()


def reporter_for(config: GritConfig):
    """Progress bar on stderr unless verbosity is quiet."""
    if config.verbosity == "quiet":
        return SilentReporter()
    return ProgressReporter(err_console)


def csv_list(value: Optional[str]) -> Optional[list[str]]:
    """Comma-delimited option to a list; None when the option was not given."""
    if value is None:
        return None
    return split_csv(value)


def resolve_bounds(
    start_date: Optional[dt.datetime],
    end_date: Optional[dt.datetime],
    start_days_back: Optional[int],
    end_days_back: Optional[int],
    today: Optional[dt.date] = None,
) -> tuple[Optional[int], Optional[int]]:
    """Turn date options into instants: start of the first day, end of the last.

    Raises:
        typer.BadParameter: Both an absolute date and a days-back value were
            given for the same side
    """
    if start_date is not None and start_days_back is not None:
        raise typer.BadParameter("use either --start-date or --start-days-back")
    if end_date is not None and end_days_back is not None:
        raise typer.BadParameter("use either --end-date or --end-days-back")

    today = today or dt.date.today()

    start = None
    if start_date is not None:
        start = day_start(start_date.date())
    elif start_days_back is not None:
        start = day_start(today - dt.timedelta(days=start_days_back))

    end = None
    if end_date is not None:
        end = day_end(end_date.date())
    elif end_days_back is not None:
        end = day_end(today - dt.timedelta(days=end_days_back))

    return start, end


@contextlib.contextmanager
def handle_errors() -> Iterator[None]:
    """Map grit errors to exit codes: 2 for bad input, 1 for everything else."""
    try:
        yield
    except (ConfigurationError, FilterPatternError) as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_USAGE)
    except GritError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_FAILURE)
