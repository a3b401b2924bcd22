"""Tests for resolving date bounds to commit bounds."""

import datetime as dt

import pytest

from conftest import FakeRepository, requires_git
from grit.analysis.calendar import day_start
from grit.analysis.commit_range import resolve_commit_range
from grit.analysis.models import CommitRange
from grit.exceptions import InvalidConfigError, RepositoryAccessError
from grit.vcs.repository import GitRepository

HISTORY = [("c1", 100), ("c2", 200), ("c3", 300), ("c4", 400)]


class TestResolveCommitRange:
    """Test resolve_commit_range against an in-memory history."""

    def test_no_bounds_gives_unbounded_range(self):
        repo = FakeRepository(history=HISTORY)
        commit_range = resolve_commit_range(repo)
        assert commit_range == CommitRange(None, None)
        assert commit_range.is_unbounded
        assert repo.walks == 0

    def test_start_picks_oldest_commit_at_or_after(self):
        repo = FakeRepository(history=HISTORY)
        assert resolve_commit_range(repo, start=150).earliest == "c2"
        assert resolve_commit_range(repo, start=200).earliest == "c2"

    def test_end_picks_newest_commit_at_or_before(self):
        repo = FakeRepository(history=HISTORY)
        assert resolve_commit_range(repo, end=350).latest == "c3"
        assert resolve_commit_range(repo, end=300).latest == "c3"

    def test_both_bounds(self):
        repo = FakeRepository(history=HISTORY)
        assert resolve_commit_range(repo, start=150, end=350) == CommitRange("c2", "c3")

    def test_window_without_commits_is_empty(self):
        """Start and end fall between the same two commits."""
        repo = FakeRepository(history=HISTORY)
        commit_range = resolve_commit_range(repo, start=210, end=290)
        assert commit_range == CommitRange("c3", "c2", is_empty=True)
        assert not commit_range.is_unbounded

    def test_single_commit_window_is_not_empty(self):
        repo = FakeRepository(history=HISTORY)
        commit_range = resolve_commit_range(repo, start=250, end=350)
        assert commit_range == CommitRange("c3", "c3")
        assert not commit_range.is_empty

    def test_unmatched_bounds_stay_none(self):
        repo = FakeRepository(history=HISTORY)
        assert resolve_commit_range(repo, start=1000) == CommitRange(None, None)
        assert resolve_commit_range(repo, end=50) == CommitRange(None, None)

    def test_each_bound_walks_once(self):
        repo = FakeRepository(history=HISTORY)
        resolve_commit_range(repo, start=150, end=350)
        assert repo.walks == 2

    def test_start_after_end_rejected(self):
        repo = FakeRepository(history=HISTORY)
        with pytest.raises(InvalidConfigError):
            resolve_commit_range(repo, start=300, end=200)

    def test_unborn_head_is_fatal(self):
        with pytest.raises(RepositoryAccessError):
            resolve_commit_range(FakeRepository(history=[]))

    def test_accepts_datetimes(self):
        repo = FakeRepository(history=HISTORY)
        start = dt.datetime.fromtimestamp(250)
        assert resolve_commit_range(repo, start=start).earliest == "c3"


@requires_git
class TestResolveCommitRangeGit:
    """Test resolve_commit_range on a real repository."""

    def test_start_between_commits(self, sample_repo):
        repo = GitRepository.open(sample_repo.root)
        commit_range = resolve_commit_range(repo, start=day_start(dt.date(2020, 3, 14)))
        assert commit_range.earliest == sample_repo.commits["c2"]
        assert commit_range.latest is None

    def test_end_before_later_commits(self, sample_repo):
        repo = GitRepository.open(sample_repo.root)
        commit_range = resolve_commit_range(repo, end=day_start(dt.date(2020, 3, 14)))
        assert commit_range.latest == sample_repo.commits["c1"]
