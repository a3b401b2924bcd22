"""Per-file effort: distinct commits and distinct active days."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, Union

from ..core.progress import ProgressCallback
from ..logging_config import get_logger
from ..vcs.repository import GitRepository
from .blame import repository_factory
from .calendar import local_date
from .models import CommitRange, EffortRecord
from .pool import DEFAULT_CONCURRENCY, RepoFactory, run_per_file

logger = get_logger(__name__)


def file_effort(
    repo: GitRepository, path: str, commit_range: Optional[CommitRange] = None
) -> EffortRecord:
    """Effort for one file from its blame within ``commit_range``."""
    commits = {hunk.final_commit_id for hunk in repo.blame(path, commit_range)}
    days = {local_date(repo.commit_timestamp(commit)) for commit in commits}
    return EffortRecord(file=path, commits=len(commits), active_days=len(days))


def compute_effort(
    repo_path: Union[Path, str],
    files: Sequence[str],
    commit_range: Optional[CommitRange] = None,
    concurrency: int = DEFAULT_CONCURRENCY,
    on_progress: Optional[ProgressCallback] = None,
    repo_factory: Optional[RepoFactory] = None,
) -> list[EffortRecord]:
    """Effort record per file, most commits first.

    Files whose blame fails are logged and left out.
    """
    commit_range = commit_range or CommitRange()
    if commit_range.is_empty:
        logger.info("Empty commit range, no effort to measure")
        return []
    factory = repo_factory or repository_factory(repo_path)

    outcome = run_per_file(
        files,
        factory,
        lambda repo, path: file_effort(repo, path, commit_range),
        concurrency=concurrency,
        on_progress=on_progress,
    )

    records = sorted(
        outcome.results.values(),
        key=lambda r: (-r.commits, -r.active_days, r.file),
    )
    logger.info("Computed effort for %d files", len(records))
    return records
