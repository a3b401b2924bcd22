"""Resolve calendar bounds to the commits that delimit a blame range."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from ..exceptions import InvalidConfigError
from ..logging_config import get_logger
from ..vcs.models import RevisionOrder
from .calendar import Instant, to_instant
from .models import CommitRange

if TYPE_CHECKING:
    from ..vcs.repository import GitRepository

logger = get_logger(__name__)


def resolve_commit_range(
    repo: "GitRepository",
    start: Optional[Instant] = None,
    end: Optional[Instant] = None,
) -> CommitRange:
    """Map optional start/end instants to the first/last qualifying commits.

    A missing bound stays ``None`` ("no restriction on that side"), which is
    not the same as binding to the root or head commit. Each bound walks
    history at most once and stops at the first qualifying commit:

    - ``earliest``: oldest-first walk, first commit with timestamp >= start
    - ``latest``: newest-first walk, first commit with timestamp <= end

    When both bounds resolve but no commit lies between them, the range is
    marked ``is_empty``. A bound that no commit satisfies stays ``None``.

    Raises:
        RepositoryAccessError: The repository has no resolvable HEAD
        InvalidConfigError: ``start`` is after ``end``
    """
    start_ts = to_instant(start) if start is not None else None
    end_ts = to_instant(end) if end is not None else None

    if start_ts is not None and end_ts is not None and start_ts > end_ts:
        raise InvalidConfigError("start", start, f"is after end ({end})")

    # Fails fast on unborn or unreadable HEAD even when no bound is given
    repo.head()

    earliest = None
    if start_ts is not None:
        earliest = _first_matching(
            repo, RevisionOrder.OLDEST_FIRST, lambda ts: ts >= start_ts
        )
        if earliest is None:
            logger.warning("No commit on or after start bound %s", start)

    latest = None
    if end_ts is not None:
        latest = _first_matching(
            repo, RevisionOrder.NEWEST_FIRST, lambda ts: ts <= end_ts
        )
        if latest is None:
            logger.warning("No commit on or before end bound %s", end)

    is_empty = (
        earliest is not None
        and latest is not None
        and repo.commit_timestamp(earliest) > repo.commit_timestamp(latest)
    )
    if is_empty:
        logger.warning("No commit between %s and %s", start, end)

    commit_range = CommitRange(earliest=earliest, latest=latest, is_empty=is_empty)
    logger.debug("Resolved commit range: %s", commit_range)
    return commit_range


def _first_matching(repo: "GitRepository", order: RevisionOrder, predicate) -> Optional[str]:
    walk = repo.walk_revisions(order)
    try:
        for commit_id in walk:
            if predicate(repo.commit_timestamp(commit_id)):
                return commit_id
        return None
    finally:
        walk.close()
