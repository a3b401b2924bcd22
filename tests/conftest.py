"""Shared test fixtures for grit tests."""

import datetime as dt
import os
import shutil
import subprocess
from pathlib import Path

import pytest

from grit.exceptions import BlameError, RepositoryAccessError
from grit.vcs.models import Hunk, RevisionOrder


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not found")


def utc(year, month, day, hour=12) -> int:
    """Unix seconds for a UTC wall-clock time."""
    return int(dt.datetime(year, month, day, hour, tzinfo=dt.timezone.utc).timestamp())


class GitBuilder:
    """Builds a throwaway repository with fixed authors and dates."""

    def __init__(self, root: Path):
        self.root = root
        self._run("init", "-q")

    def _run(self, *args, env=None) -> str:
        result = subprocess.run(
            [
                "git",
                "-c", "user.name=Fixture",
                "-c", "user.email=fixture@example.com",
                "-c", "commit.gpgsign=false",
                "-C", str(self.root),
                *args,
            ],
            capture_output=True,
            text=True,
            env=env,
            check=True,
        )
        return result.stdout.strip()

    def commit(self, files: dict, author: str, timestamp: int, message: str = "change") -> str:
        """Write ``files`` (path -> content), commit them and return the sha."""
        for rel, content in files.items():
            target = self.root / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content)
        self._run("add", "--", *files)

        env = dict(os.environ)
        env.update(
            {
                "GIT_AUTHOR_NAME": author,
                "GIT_AUTHOR_EMAIL": f"{author.lower()}@example.com",
                "GIT_COMMITTER_NAME": author,
                "GIT_COMMITTER_EMAIL": f"{author.lower()}@example.com",
                "GIT_AUTHOR_DATE": f"@{timestamp} +0000",
                "GIT_COMMITTER_DATE": f"@{timestamp} +0000",
            }
        )
        self._run("commit", "-q", "-m", message, env=env)
        return self._run("rev-parse", "HEAD")


@pytest.fixture(scope="module")
def sample_repo(tmp_path_factory):
    """Three commits by Alice and Bob over Friday 2020-03-13 and Monday 2020-03-16.

    Final blame at HEAD:
        a.py           3 lines Alice (c1), 1 line Bob (c2)
        README.md      2 lines Alice (c1)
        b.py          10 lines Bob (c2)
        docs/guide.md  2 lines Alice (c3)
    """
    if shutil.which("git") is None:
        pytest.skip("git not found")

    root = tmp_path_factory.mktemp("sample_repo")
    builder = GitBuilder(root)

    c1 = builder.commit(
        {"a.py": "one\ntwo\nthree\n", "README.md": "# Sample\nhello\n"},
        author="Alice",
        timestamp=utc(2020, 3, 13, 12),
        message="initial",
    )
    c2 = builder.commit(
        {
            "a.py": "one\ntwo\nthree\nfour\n",
            "b.py": "".join(f"line {i}\n" for i in range(10)),
        },
        author="Bob",
        timestamp=utc(2020, 3, 16, 10),
        message="add b",
    )
    c3 = builder.commit(
        {"docs/guide.md": "# Guide\nsteps\n"},
        author="Alice",
        timestamp=utc(2020, 3, 16, 12),
        message="docs",
    )

    builder.commits = {"c1": c1, "c2": c2, "c3": c3}
    return builder


class FakeRepository:
    """In-memory stand-in for GitRepository.

    ``history`` is a list of (commit_id, timestamp) oldest first; ``blames``
    maps a path to its hunks or to an exception to raise.
    """

    def __init__(self, history=None, blames=None, authors=None):
        self.history = list(history or [])
        self.blames = dict(blames or {})
        self.authors = dict(authors or {})
        self.walks = 0

    def head(self) -> str:
        if not self.history:
            raise RepositoryAccessError("fake", "no resolvable HEAD commit")
        return self.history[-1][0]

    def walk_revisions(self, order=RevisionOrder.NEWEST_FIRST):
        self.walks += 1
        self.head()
        commits = self.history if order == RevisionOrder.OLDEST_FIRST else self.history[::-1]
        for commit_id, _ in commits:
            yield commit_id

    def commit_timestamp(self, commit_id: str) -> int:
        return dict(self.history)[commit_id]

    def commit_author_name(self, commit_id: str) -> str:
        return self.authors[commit_id]

    def blame(self, path, commit_range=None):
        entry = self.blames.get(path)
        if entry is None:
            raise BlameError(path, "no such path in HEAD")
        if isinstance(entry, Exception):
            raise entry
        return iter(entry)


def hunk(commit: str, author: str, lines: int) -> Hunk:
    return Hunk(final_commit_id=commit, final_author_name=author, lines_in_hunk=lines)
