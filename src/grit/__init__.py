"""
grit - git repository analytics

Authorship ("fame"), per-file effort and commit time series computed from
git blame and history over a bounded commit range.
"""

__version__ = "0.3.0"

from .api import by_date, by_file, effort, fame
from .analysis import AuthorStats, CommitRange, DateBucket, EffortRecord, SortKey

__all__ = [
    "fame",
    "effort",
    "by_date",
    "by_file",
    "AuthorStats",
    "CommitRange",
    "DateBucket",
    "EffortRecord",
    "SortKey",
]
