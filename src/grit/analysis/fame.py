"""Reduce blame records into per-author fame statistics."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Callable, Optional

from ..logging_config import get_logger
from .models import AuthorStats, BlameRecord, SortKey

logger = get_logger(__name__)

_SORT_METRICS: dict[SortKey, Callable[[AuthorStats], int]] = {
    SortKey.COMMITS: lambda s: s.commit_count,
    SortKey.LOC: lambda s: s.total_lines,
    SortKey.FILES: lambda s: s.file_count,
}


def _ratio(count: int, total: int) -> float:
    return count / total if total > 0 else 0.0


def reduce_author_stats(
    records: Iterable[BlameRecord],
    exclude_authors: Optional[Iterable[str]] = None,
    sort_key: "SortKey | str" = SortKey.COMMITS,
) -> list[AuthorStats]:
    """Merge blame records into per-author totals, percentages and order.

    Args:
        records: Flattened output of the blame aggregator
        exclude_authors: Display names to drop, matched exactly and record by record
        sort_key: Descending sort metric; ties are ordered by author name

    Returns:
        AuthorStats list, independent of the order records arrive in
    """
    key = SortKey.parse(sort_key)
    excluded = frozenset(exclude_authors or ())

    by_author: dict[str, AuthorStats] = {}
    total_lines = 0
    dropped = 0

    for record in records:
        if record.author in excluded:
            dropped += 1
            continue

        stats = by_author.get(record.author)
        if stats is None:
            stats = by_author[record.author] = AuthorStats(author=record.author)
        stats.total_lines += record.lines
        stats.commits.add(record.commit)
        stats.files.add(record.file)
        total_lines += record.lines

    all_commits: set[str] = set()
    all_files: set[str] = set()
    for stats in by_author.values():
        all_commits |= stats.commits
        all_files |= stats.files

    for stats in by_author.values():
        stats.perc_lines = _ratio(stats.total_lines, total_lines)
        stats.perc_commits = _ratio(stats.commit_count, len(all_commits))
        stats.perc_files = _ratio(stats.file_count, len(all_files))

    logger.debug(
        "Totals: %d authors, %d files, %d commits, %d lines (%d records excluded)",
        len(by_author),
        len(all_files),
        len(all_commits),
        total_lines,
        dropped,
    )

    metric = _SORT_METRICS[key]
    return sorted(by_author.values(), key=lambda s: (-metric(s), s.author))
