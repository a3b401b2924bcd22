"""Tests for commit instant collection and the by-date series."""

import datetime as dt

import pytest

from conftest import FakeRepository, requires_git
from grit.analysis.by_date import collect_commit_instants
from grit.analysis.calendar import day_end, day_start
from grit.api import by_date
from grit.exceptions import InvalidConfigError

HISTORY = [("c1", 100), ("c2", 200), ("c3", 300)]


class TestCollectCommitInstants:
    """Test collect_commit_instants function."""

    def test_all_commits_newest_first(self):
        assert collect_commit_instants(FakeRepository(history=HISTORY)) == [300, 200, 100]

    def test_bounds_are_inclusive(self):
        repo = FakeRepository(history=HISTORY)
        assert collect_commit_instants(repo, start=200, end=300) == [300, 200]

    def test_start_only(self):
        assert collect_commit_instants(FakeRepository(history=HISTORY), start=150) == [300, 200]

    def test_end_only(self):
        assert collect_commit_instants(FakeRepository(history=HISTORY), end=150) == [100]

    def test_start_after_end_rejected(self):
        with pytest.raises(InvalidConfigError):
            collect_commit_instants(FakeRepository(history=HISTORY), start=300, end=100)


@requires_git
class TestByDateGit:
    """Test the by-date pipeline on a real repository."""

    def test_gap_filled_series(self, sample_repo):
        buckets = by_date(sample_repo.root)
        assert [(b.date, b.count) for b in buckets] == [
            (dt.date(2020, 3, 13), 1),
            (dt.date(2020, 3, 14), 0),
            (dt.date(2020, 3, 15), 0),
            (dt.date(2020, 3, 16), 2),
        ]

    def test_ignore_weekends(self, sample_repo):
        buckets = by_date(sample_repo.root, ignore_weekends=True)
        assert [(b.date, b.count) for b in buckets] == [
            (dt.date(2020, 3, 13), 1),
            (dt.date(2020, 3, 16), 2),
        ]

    def test_date_bounds(self, sample_repo):
        buckets = by_date(
            sample_repo.root,
            start=day_start(dt.date(2020, 3, 16)),
            end=day_end(dt.date(2020, 3, 16)),
        )
        assert [(b.date, b.count) for b in buckets] == [(dt.date(2020, 3, 16), 2)]
