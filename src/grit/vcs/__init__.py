"""Git access layer: open, walk history, blame, list tracked files."""

from .models import CommitInfo, Hunk, RevisionOrder
from .porcelain import parse_porcelain
from .repository import GitRepository

__all__ = [
    "CommitInfo",
    "GitRepository",
    "Hunk",
    "RevisionOrder",
    "parse_porcelain",
]
