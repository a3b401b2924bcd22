"""Blame aggregation, reducers and calendar bucketing."""

from .blame import BlameAggregator, aggregate_blame, records_from_hunks, repository_factory
from .by_date import collect_commit_instants
from .by_file import blame_file_by_day
from .calendar import bucket_by_date, is_weekend, local_date, total_count
from .commit_range import resolve_commit_range
from .effort import compute_effort, file_effort
from .fame import reduce_author_stats
from .fileset import compile_patterns, list_files, select_files
from .models import (
    AuthorStats,
    BlameRecord,
    CommitRange,
    DateBucket,
    EffortRecord,
    FileDayLines,
    SortKey,
)

__all__ = [
    "AuthorStats",
    "BlameAggregator",
    "BlameRecord",
    "CommitRange",
    "DateBucket",
    "EffortRecord",
    "FileDayLines",
    "SortKey",
    "aggregate_blame",
    "blame_file_by_day",
    "bucket_by_date",
    "collect_commit_instants",
    "compile_patterns",
    "compute_effort",
    "file_effort",
    "is_weekend",
    "list_files",
    "local_date",
    "records_from_hunks",
    "reduce_author_stats",
    "repository_factory",
    "resolve_commit_range",
    "select_files",
    "total_count",
]
