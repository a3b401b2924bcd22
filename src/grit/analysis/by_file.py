"""Lines of a single file per author and day."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from typing import TYPE_CHECKING, Optional

from ..logging_config import get_logger
from .calendar import local_date
from .models import CommitRange, FileDayLines

if TYPE_CHECKING:
    from ..vcs.repository import GitRepository

logger = get_logger(__name__)


def blame_file_by_day(
    repo: "GitRepository",
    path: str,
    exclude_authors: Optional[Iterable[str]] = None,
    commit_range: Optional[CommitRange] = None,
) -> list[FileDayLines]:
    """Sum blamed lines of ``path`` per (author, local commit date).

    Hunks by excluded authors are skipped one by one. Newest day first,
    authors alphabetical within a day.

    Raises:
        BlameError: The file cannot be blamed
    """
    if commit_range is not None and commit_range.is_empty:
        return []

    excluded = frozenset(exclude_authors or ())

    lines: Counter[tuple[str, object]] = Counter()
    for hunk in repo.blame(path, commit_range):
        if hunk.final_author_name in excluded:
            continue
        day = local_date(repo.commit_timestamp(hunk.final_commit_id))
        lines[(hunk.final_author_name, day)] += hunk.lines_in_hunk

    rows = [FileDayLines(author=a, date=d, lines=n) for (a, d), n in lines.items()]
    rows.sort(key=lambda r: r.author)
    rows.sort(key=lambda r: r.date, reverse=True)
    logger.debug("by-file %s: %d rows", path, len(rows))
    return rows
