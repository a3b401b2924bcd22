"""Git repository handle backed by the git command line.

A ``GitRepository`` caches commit metadata as it walks history or blames
files. It is not meant to be shared between threads: concurrent tasks each
open their own handle.
"""

from __future__ import annotations

import subprocess
from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

from ..exceptions import BlameError, RepositoryAccessError
from ..logging_config import get_logger
from .models import CommitInfo, Hunk, RevisionOrder
from .porcelain import parse_porcelain

if TYPE_CHECKING:
    from ..analysis.models import CommitRange

logger = get_logger(__name__)

DEFAULT_GIT_TIMEOUT = 60

# Submodule entries in ``git ls-files --stage``
_GITLINK_MODE = "160000"


class GitRepository:
    """Read-only access to one git work tree."""

    def __init__(self, root: Path, timeout_seconds: int = DEFAULT_GIT_TIMEOUT):
        self.root = root
        self.timeout_seconds = timeout_seconds
        self._commits: dict[str, CommitInfo] = {}

    @classmethod
    def open(
        cls, path: Union[Path, str], timeout_seconds: int = DEFAULT_GIT_TIMEOUT
    ) -> "GitRepository":
        """Open the work tree containing ``path``.

        Raises:
            RepositoryAccessError: git is missing or ``path`` is not inside a work tree
        """
        requested = Path(path).expanduser()
        if not requested.is_dir():
            raise RepositoryAccessError(requested, "not a directory")

        try:
            result = subprocess.run(
                ["git", "-C", str(requested), "rev-parse", "--show-toplevel"],
                capture_output=True,
                text=True,
                timeout=timeout_seconds,
            )
        except FileNotFoundError:
            raise RepositoryAccessError(requested, "git executable not found")
        except subprocess.TimeoutExpired:
            raise RepositoryAccessError(requested, "git rev-parse timed out")

        if result.returncode != 0:
            raise RepositoryAccessError(requested, result.stderr.strip() or "not a git repository")

        return cls(Path(result.stdout.strip()), timeout_seconds=timeout_seconds)

    def __repr__(self) -> str:
        return f"GitRepository({str(self.root)!r})"

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def head(self) -> str:
        """Return the commit id HEAD points to.

        Raises:
            RepositoryAccessError: HEAD is unborn or unreadable
        """
        try:
            result = self._git("rev-parse", "--verify", "--quiet", "HEAD^{commit}")
        except subprocess.TimeoutExpired:
            raise RepositoryAccessError(self.root, "git rev-parse timed out")
        if result.returncode != 0 or not result.stdout.strip():
            raise RepositoryAccessError(self.root, "no resolvable HEAD commit")
        return result.stdout.strip()

    def walk_revisions(self, order: RevisionOrder = RevisionOrder.NEWEST_FIRST) -> Iterator[str]:
        """Yield commit ids reachable from HEAD in commit-date order.

        The walk streams ``git log`` output; stopping iteration early kills
        the subprocess. Timestamps and author names seen along the way are
        cached for ``commit_timestamp`` and ``commit_author_name``.

        Raises:
            RepositoryAccessError: HEAD cannot be resolved or git log fails
        """
        head = self.head()
        cmd = [
            "git",
            "-C",
            str(self.root),
            "log",
            "--date-order",
            "--format=%H%x00%ct%x00%an",
        ]
        if order == RevisionOrder.OLDEST_FIRST:
            cmd.append("--reverse")
        cmd.append(head)

        try:
            proc = subprocess.Popen(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError:
            raise RepositoryAccessError(self.root, "git executable not found")

        finished = False
        try:
            stdout = proc.stdout
            if stdout is None:
                raise RepositoryAccessError(self.root, "git log produced no output stream")
            for line in stdout:
                parts = line.rstrip("\n").split("\x00")
                if len(parts) != 3:
                    continue
                commit_id, timestamp, author = parts
                try:
                    self._commits[commit_id] = CommitInfo(commit_id, int(timestamp), author)
                except ValueError:
                    logger.debug("Skipping malformed git log line: %r", line)
                    continue
                yield commit_id

            proc.wait(timeout=self.timeout_seconds)
            finished = True
            if proc.returncode != 0:
                stderr = proc.stderr.read() if proc.stderr else ""
                raise RepositoryAccessError(self.root, f"git log failed: {stderr.strip()}")
        finally:
            if not finished and proc.poll() is None:
                proc.kill()
                proc.wait()
            if proc.stdout:
                proc.stdout.close()
            if proc.stderr:
                proc.stderr.close()

    def commit_timestamp(self, commit_id: str) -> int:
        """Committer time of ``commit_id`` in unix seconds."""
        return self._commit_info(commit_id).timestamp

    def commit_author_name(self, commit_id: str) -> str:
        return self._commit_info(commit_id).author

    def _commit_info(self, commit_id: str) -> CommitInfo:
        info = self._commits.get(commit_id)
        if info is not None:
            return info

        try:
            result = self._git("show", "-s", "--format=%ct%x00%an", commit_id)
        except subprocess.TimeoutExpired:
            raise RepositoryAccessError(self.root, f"git show timed out for {commit_id}")
        if result.returncode != 0:
            raise RepositoryAccessError(
                self.root, f"unknown commit {commit_id}: {result.stderr.strip()}"
            )

        timestamp, _, author = result.stdout.strip().partition("\x00")
        info = CommitInfo(commit_id, int(timestamp), author)
        self._commits[commit_id] = info
        return info

    # ------------------------------------------------------------------
    # Blame
    # ------------------------------------------------------------------

    def blame(self, path: str, commit_range: Optional["CommitRange"] = None) -> Iterator[Hunk]:
        """Blame ``path`` as of the newest bound of ``commit_range`` (HEAD if unset).

        With an ``earliest`` bound, lines older than it are attributed to
        that boundary commit.

        Raises:
            BlameError: git blame failed or its output could not be parsed
        """
        newest = commit_range.latest if commit_range and commit_range.latest else "HEAD"
        revision = newest
        if commit_range and commit_range.earliest:
            revision = f"{commit_range.earliest}..{newest}"

        try:
            result = self._git("blame", "--porcelain", revision, "--", path)
        except subprocess.TimeoutExpired:
            raise BlameError(path, f"timed out after {self.timeout_seconds}s", commit=newest)

        if result.returncode != 0:
            raise BlameError(path, result.stderr.strip() or "git blame failed", commit=newest)

        try:
            hunks, commits = parse_porcelain(result.stdout)
        except ValueError as e:
            raise BlameError(path, str(e), commit=newest)

        self._commits.update(commits)
        return iter(hunks)

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    def list_tracked_files(self) -> list[str]:
        """Tracked paths relative to the work tree root, submodules excluded."""
        try:
            result = self._git("ls-files", "-z", "--stage")
        except subprocess.TimeoutExpired:
            raise RepositoryAccessError(self.root, "git ls-files timed out")
        if result.returncode != 0:
            raise RepositoryAccessError(self.root, f"git ls-files failed: {result.stderr.strip()}")

        files = set()
        for entry in result.stdout.split("\x00"):
            if not entry:
                continue
            meta, _, file_path = entry.partition("\t")
            if meta.split(" ", 1)[0] == _GITLINK_MODE:
                continue
            files.add(file_path)
        return sorted(files)

    def _git(self, *args: str) -> subprocess.CompletedProcess:
        try:
            result = subprocess.run(
                ["git", "-C", str(self.root), *args],
                capture_output=True,
                timeout=self.timeout_seconds,
            )
        except FileNotFoundError:
            raise RepositoryAccessError(self.root, "git executable not found")
        # Decoded by hand: text mode would turn a bare \r in file content into a line break
        result.stdout = result.stdout.decode("utf-8", errors="replace")
        result.stderr = result.stderr.decode("utf-8", errors="replace")
        return result
