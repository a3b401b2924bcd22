"""Public API for grit.

Each function runs one analysis end to end and returns plain data for the
caller to format.

Example:
    >>> from grit import fame
    >>>
    >>> stats = fame("/path/to/repo", sort="loc", threads=4)
    >>> stats[0].author, stats[0].perc_lines
    ('Alice', 0.61)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from .analysis.blame import aggregate_blame, repository_factory
from .analysis.by_date import collect_commit_instants
from .analysis.by_file import blame_file_by_day
from .analysis.calendar import Instant, bucket_by_date
from .analysis.commit_range import resolve_commit_range
from .analysis.effort import compute_effort
from .analysis.fame import reduce_author_stats
from .analysis.fileset import compile_patterns, list_files
from .analysis.models import AuthorStats, DateBucket, EffortRecord, FileDayLines
from .config import GritConfig, load_config
from .core.progress import ProgressCallback
from .vcs.repository import GitRepository

PathLike = Union[Path, str]


def _prepare(config: Optional[GritConfig], overrides: dict) -> GritConfig:
    config = config or load_config(**overrides)
    # Malformed globs fail before the repository is touched
    compile_patterns(config.include)
    compile_patterns(config.exclude)
    return config


def fame(
    path: PathLike = ".",
    start: Optional[Instant] = None,
    end: Optional[Instant] = None,
    config: Optional[GritConfig] = None,
    on_progress: Optional[ProgressCallback] = None,
    **overrides,
) -> list[AuthorStats]:
    """Authorship distribution of the tracked files within the date bounds.

    Args:
        path: Any directory inside the work tree
        start: Lower date bound (instant or datetime), unbounded if None
        end: Upper date bound, unbounded if None
        config: Ready-made configuration; otherwise loaded with ``overrides``
        on_progress: Called as each file finishes blaming

    Raises:
        RepositoryAccessError: The repository cannot be opened
        FilterPatternError: An include/exclude glob is malformed
    """
    config = _prepare(config, overrides)
    repo = GitRepository.open(path, timeout_seconds=config.git_timeout_seconds)

    commit_range = resolve_commit_range(repo, start, end)
    files = list_files(repo, config.include, config.exclude)

    records = aggregate_blame(
        repo.root,
        files,
        commit_range,
        concurrency=config.threads,
        on_progress=on_progress,
        timeout_seconds=config.git_timeout_seconds,
    )

    return reduce_author_stats(
        records, exclude_authors=config.restrict_authors, sort_key=config.sort_key
    )


def effort(
    path: PathLike = ".",
    start: Optional[Instant] = None,
    end: Optional[Instant] = None,
    config: Optional[GritConfig] = None,
    on_progress: Optional[ProgressCallback] = None,
    **overrides,
) -> list[EffortRecord]:
    """Distinct commits and active days per tracked file, busiest first."""
    config = _prepare(config, overrides)
    repo = GitRepository.open(path, timeout_seconds=config.git_timeout_seconds)

    commit_range = resolve_commit_range(repo, start, end)
    files = list_files(repo, config.include, config.exclude)

    return compute_effort(
        repo.root,
        files,
        commit_range,
        concurrency=config.threads,
        on_progress=on_progress,
        repo_factory=repository_factory(repo.root, config.git_timeout_seconds),
    )


def by_date(
    path: PathLike = ".",
    start: Optional[Instant] = None,
    end: Optional[Instant] = None,
    config: Optional[GritConfig] = None,
    **overrides,
) -> list[DateBucket]:
    """Commits per local day reachable from HEAD."""
    config = config or load_config(**overrides)
    repo = GitRepository.open(path, timeout_seconds=config.git_timeout_seconds)

    instants = collect_commit_instants(repo, start, end)
    return bucket_by_date(
        instants, ignore_weekends=config.ignore_weekends, fill_gaps=config.fill_gaps
    )


def by_file(
    file_path: str,
    path: PathLike = ".",
    config: Optional[GritConfig] = None,
    **overrides,
) -> list[FileDayLines]:
    """Blamed lines of one file per author and day, newest day first.

    Raises:
        BlameError: The file cannot be blamed
    """
    config = config or load_config(**overrides)
    repo = GitRepository.open(path, timeout_seconds=config.git_timeout_seconds)
    return blame_file_by_day(repo, file_path, exclude_authors=config.restrict_authors)
