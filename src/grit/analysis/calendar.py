"""Bucket commit instants into local calendar days."""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable
from typing import Union

import numpy as np

from .models import DateBucket

Instant = Union[int, float, dt.datetime]


def to_instant(value: Instant) -> int:
    """Unix seconds for an int/float instant or a datetime (naive = local time)."""
    if isinstance(value, dt.datetime):
        return int(value.timestamp())
    return int(value)


def local_date(instant: Instant) -> dt.date:
    """Calendar date of ``instant`` in the local time zone."""
    if isinstance(instant, dt.datetime):
        return instant.astimezone().date() if instant.tzinfo else instant.date()
    return dt.datetime.fromtimestamp(instant).date()


def day_start(day: dt.date) -> int:
    """First second of ``day`` in local time."""
    return int(dt.datetime.combine(day, dt.time.min).timestamp())


def day_end(day: dt.date) -> int:
    """Last second of ``day`` in local time."""
    return int(dt.datetime.combine(day, dt.time(23, 59, 59)).timestamp())


def is_weekend(instant: Instant) -> bool:
    """True when ``instant`` falls on a local Saturday or Sunday."""
    return not bool(np.is_busday(np.datetime64(local_date(instant), "D")))


def bucket_by_date(
    instants: Iterable[Instant],
    ignore_weekends: bool = False,
    fill_gaps: bool = True,
) -> list[DateBucket]:
    """Count instants per local calendar day, ascending by date.

    Args:
        instants: Commit instants (unix seconds or datetimes)
        ignore_weekends: Drop Saturday/Sunday before counting; weekend days
            never appear in the output, not even as zero-count buckets
        fill_gaps: Insert zero-count days strictly between the first and last
            observed dates

    Returns:
        List of DateBucket, strictly increasing by date
    """
    days = np.array([local_date(i) for i in instants], dtype="datetime64[D]")
    if days.size == 0:
        return []

    if ignore_weekends:
        days = days[np.is_busday(days)]
        if days.size == 0:
            return []

    # np.unique sorts, so buckets come out ascending
    unique_days, counts = np.unique(days, return_counts=True)

    if fill_gaps:
        calendar = np.arange(unique_days[0], unique_days[-1] + 1, dtype="datetime64[D]")
        if ignore_weekends:
            calendar = calendar[np.is_busday(calendar)]
        filled = np.zeros(calendar.size, dtype=np.int64)
        filled[np.searchsorted(calendar, unique_days)] = counts
        unique_days, counts = calendar, filled

    return [
        DateBucket(date=day.item(), count=int(count))
        for day, count in zip(unique_days, counts)
    ]


def total_count(buckets: Iterable[DateBucket]) -> int:
    """Sum of bucket counts, as reported on the CSV ``Total`` row."""
    return sum(b.count for b in buckets)
