"""Commit instants for the by-date time series."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from ..exceptions import InvalidConfigError
from ..logging_config import get_logger
from ..vcs.models import RevisionOrder
from .calendar import Instant, to_instant

if TYPE_CHECKING:
    from ..vcs.repository import GitRepository

logger = get_logger(__name__)


def collect_commit_instants(
    repo: "GitRepository",
    start: Optional[Instant] = None,
    end: Optional[Instant] = None,
) -> list[int]:
    """Timestamps of commits reachable from HEAD within ``[start, end]``.

    Either bound may be omitted.
    """
    start_ts = to_instant(start) if start is not None else None
    end_ts = to_instant(end) if end is not None else None
    if start_ts is not None and end_ts is not None and start_ts > end_ts:
        raise InvalidConfigError("start", start, f"is after end ({end})")

    instants = []
    for commit_id in repo.walk_revisions(RevisionOrder.NEWEST_FIRST):
        ts = repo.commit_timestamp(commit_id)
        if start_ts is not None and ts < start_ts:
            continue
        if end_ts is not None and ts > end_ts:
            continue
        instants.append(ts)

    logger.info("Collected %d commits for by-date", len(instants))
    return instants
