"""Data models for blame aggregation and activity statistics."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..exceptions import InvalidConfigError


class SortKey(str, Enum):
    """Fame output ordering."""

    COMMITS = "commits"
    LOC = "loc"
    FILES = "files"

    @classmethod
    def parse(cls, value: "SortKey | str | None") -> "SortKey":
        """Parse a sort key; ``None`` and the legacy ``commit`` mean COMMITS."""
        if value is None:
            return cls.COMMITS
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        if normalized == "commit":
            return cls.COMMITS
        try:
            return cls(normalized)
        except ValueError:
            raise InvalidConfigError(
                "sort", value, "must be one of commits, loc, files"
            )


@dataclass(frozen=True)
class CommitRange:
    """Resolved commit bounds; ``None`` means unbounded on that side.

    ``is_empty`` marks a window that holds no commit at all (the first commit
    after the start is newer than the last commit before the end). Nothing
    is blamed for an empty range.
    """

    earliest: Optional[str] = None
    latest: Optional[str] = None
    is_empty: bool = False

    @property
    def is_unbounded(self) -> bool:
        return not self.is_empty and self.earliest is None and self.latest is None


@dataclass(frozen=True)
class BlameRecord:
    author: str
    commit: str
    file: str
    lines: int  # sum of hunk sizes for (author, commit) within file


@dataclass
class AuthorStats:
    author: str
    total_lines: int = 0
    commits: set[str] = field(default_factory=set)
    files: set[str] = field(default_factory=set)
    perc_lines: float = 0.0
    perc_commits: float = 0.0
    perc_files: float = 0.0

    @property
    def commit_count(self) -> int:
        return len(self.commits)

    @property
    def file_count(self) -> int:
        return len(self.files)


@dataclass(frozen=True)
class DateBucket:
    date: dt.date  # local calendar date
    count: int


@dataclass(frozen=True)
class EffortRecord:
    file: str
    commits: int  # distinct commit ids blaming the file
    active_days: int  # distinct local dates of those commits


@dataclass(frozen=True)
class FileDayLines:
    """Lines of one file attributed to an author on one local day."""

    author: str
    date: dt.date
    lines: int
