"""CSV and table output for the CLI commands."""

from __future__ import annotations

import csv
import sys
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Optional

from rich.table import Table

from ..analysis.calendar import total_count
from ..analysis.models import AuthorStats, DateBucket, EffortRecord, FileDayLines
from ._common import console

FAME_HEADER = ["author", "files", "commits", "loc", "perc_files", "perc_commits", "perc_loc"]
BYDATE_HEADER = ["date", "count"]
EFFORT_HEADER = ["file", "commits", "active_days"]
BYFILE_HEADER = ["author", "date", "loc"]


def write_csv(header: Sequence[str], rows: Iterable[Sequence[object]], file: Optional[Path] = None):
    """Write rows to ``file`` or stdout."""
    if file is None:
        _write_rows(sys.stdout, header, rows)
        return
    with open(file, "w", newline="", encoding="utf-8") as fh:
        _write_rows(fh, header, rows)


def _write_rows(stream, header, rows) -> None:
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(header)
    writer.writerows(rows)


def _pct(value: float) -> str:
    return f"{value * 100:.2f}"


def fame_rows(stats: Iterable[AuthorStats]) -> list[list[object]]:
    return [
        [
            s.author,
            s.file_count,
            s.commit_count,
            s.total_lines,
            _pct(s.perc_files),
            _pct(s.perc_commits),
            _pct(s.perc_lines),
        ]
        for s in stats
    ]


def bydate_rows(buckets: Sequence[DateBucket]) -> list[list[object]]:
    rows: list[list[object]] = [[b.date.isoformat(), b.count] for b in buckets]
    rows.append(["Total", total_count(buckets)])
    return rows


def effort_rows(records: Iterable[EffortRecord]) -> list[list[object]]:
    return [[r.file, r.commits, r.active_days] for r in records]


def byfile_rows(rows: Iterable[FileDayLines]) -> list[list[object]]:
    return [[r.author, r.date.isoformat(), r.lines] for r in rows]


def print_fame_table(stats: Sequence[AuthorStats]) -> None:
    table = Table(title="Fame", show_lines=False, pad_edge=True)
    table.add_column("Author", style="bold")
    table.add_column("Files", justify="right")
    table.add_column("Commits", justify="right")
    table.add_column("LOC", justify="right", style="cyan")
    table.add_column("Distribution (%)", justify="right", style="dim")

    for s in stats:
        distribution = (
            f"{s.perc_files * 100:<5.1f} / {s.perc_commits * 100:<5.1f} / {s.perc_lines * 100:<5.1f}"
        )
        table.add_row(
            s.author, str(s.file_count), str(s.commit_count), str(s.total_lines), distribution
        )

    console.print(table)


def print_effort_table(records: Sequence[EffortRecord]) -> None:
    table = Table(title="Effort", show_lines=False, pad_edge=True)
    table.add_column("File", style="bold")
    table.add_column("Commits", justify="right", style="cyan")
    table.add_column("Active days", justify="right")

    for r in records:
        table.add_row(r.file, str(r.commits), str(r.active_days))

    console.print(table)


def print_bydate_table(buckets: Sequence[DateBucket]) -> None:
    table = Table(title="Commits by date", show_lines=False, pad_edge=True)
    table.add_column("Date", style="bold")
    table.add_column("Count", justify="right", style="cyan")

    for b in buckets:
        table.add_row(b.date.isoformat(), str(b.count))
    table.add_section()
    table.add_row("Total", str(total_count(buckets)), style="bold")

    console.print(table)
