"""Data models for the git access layer."""

from dataclasses import dataclass
from enum import Enum


class RevisionOrder(str, Enum):
    OLDEST_FIRST = "oldest_first"
    NEWEST_FIRST = "newest_first"


@dataclass(frozen=True)
class Hunk:
    """A contiguous run of lines attributed to one commit."""

    final_commit_id: str
    final_author_name: str
    lines_in_hunk: int


@dataclass(frozen=True)
class CommitInfo:
    commit_id: str
    timestamp: int  # committer time, unix seconds
    author: str
