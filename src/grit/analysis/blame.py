"""Concurrent blame aggregation: one blame per file, summed per (author, commit)."""

from __future__ import annotations

import functools
from collections import Counter
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence, Union

from ..core.progress import ProgressCallback
from ..logging_config import get_logger
from ..vcs.repository import DEFAULT_GIT_TIMEOUT, GitRepository
from .models import BlameRecord, CommitRange
from .pool import DEFAULT_CONCURRENCY, RepoFactory, run_per_file

if TYPE_CHECKING:
    from ..vcs.models import Hunk

logger = get_logger(__name__)


def repository_factory(
    repo_path: Union[Path, str], timeout_seconds: int = DEFAULT_GIT_TIMEOUT
) -> RepoFactory:
    """Factory that opens a fresh handle on every call, one per worker task."""
    return functools.partial(GitRepository.open, repo_path, timeout_seconds=timeout_seconds)


def records_from_hunks(path: str, hunks: "Sequence[Hunk]") -> tuple[BlameRecord, ...]:
    """Sum hunk sizes per (author, commit) and tag them with ``path``."""
    lines: Counter[tuple[str, str]] = Counter()
    for hunk in hunks:
        lines[(hunk.final_author_name, hunk.final_commit_id)] += hunk.lines_in_hunk

    return tuple(
        BlameRecord(author=author, commit=commit, file=path, lines=count)
        for (author, commit), count in sorted(lines.items())
    )


class BlameAggregator:
    """Fans out blame over a bounded pool and flattens the per-file records.

    Example:
        >>> aggregator = BlameAggregator(repository_factory("."), concurrency=4)
        >>> records = aggregator.aggregate(["README.md"], CommitRange())
    """

    def __init__(
        self,
        repo_factory: RepoFactory,
        concurrency: int = DEFAULT_CONCURRENCY,
        on_progress: Optional[ProgressCallback] = None,
    ):
        self.repo_factory = repo_factory
        self.concurrency = concurrency
        self.on_progress = on_progress
        self.failed_files: list[str] = []

    def aggregate(
        self, files: Sequence[str], commit_range: Optional[CommitRange] = None
    ) -> list[BlameRecord]:
        """Blame every file within ``commit_range``; no ordering across files."""
        commit_range = commit_range or CommitRange()
        self.failed_files = []
        if commit_range.is_empty:
            logger.info("Empty commit range, nothing to blame")
            return []

        def _blame_one(repo: GitRepository, path: str) -> tuple[BlameRecord, ...]:
            return records_from_hunks(path, list(repo.blame(path, commit_range)))

        outcome = run_per_file(
            files,
            self.repo_factory,
            _blame_one,
            concurrency=self.concurrency,
            on_progress=self.on_progress,
        )
        self.failed_files = outcome.failed

        records = [record for per_file in outcome.results.values() for record in per_file]
        logger.info("Collected %d blame records from %d files", len(records), len(outcome.results))
        return records


def aggregate_blame(
    repo_path: Union[Path, str],
    files: Sequence[str],
    commit_range: Optional[CommitRange] = None,
    concurrency: int = DEFAULT_CONCURRENCY,
    on_progress: Optional[ProgressCallback] = None,
    timeout_seconds: int = DEFAULT_GIT_TIMEOUT,
) -> list[BlameRecord]:
    """Blame ``files`` of the repository at ``repo_path`` on a fresh pool.

    Files whose blame fails are logged and contribute nothing.
    """
    aggregator = BlameAggregator(
        repository_factory(repo_path, timeout_seconds),
        concurrency=concurrency,
        on_progress=on_progress,
    )
    records = aggregator.aggregate(files, commit_range)
    if aggregator.failed_files:
        logger.warning(
            "Blame failed for %d file(s): %s",
            len(aggregator.failed_files),
            ", ".join(aggregator.failed_files),
        )
    return records
