"""Parse ``git blame --porcelain`` output into hunks.

The porcelain format opens every group of lines with a header of four
fields (``sha orig_line final_line num_lines``); lines continuing a group
carry only three. Commit metadata (``author``, ``committer-time``...) follows
the first header that mentions a commit and is not repeated later, so author
names are resolved once the whole stream has been read.
"""

from __future__ import annotations

import re

from .models import CommitInfo, Hunk

# 40 hex chars for SHA-1 repositories, 64 for SHA-256 ones
_GROUP_HEADER_RE = re.compile(r"^([0-9a-f]{40}|[0-9a-f]{64}) \d+ \d+ (\d+)$")
_LINE_HEADER_RE = re.compile(r"^([0-9a-f]{40}|[0-9a-f]{64}) \d+ \d+$")


def parse_porcelain(raw: str) -> tuple[list[Hunk], dict[str, CommitInfo]]:
    """Parse porcelain blame text.

    Returns:
        (hunks in file order, commit metadata keyed by commit id)

    Raises:
        ValueError: If a group header references a commit whose metadata
            never appears in the stream.
    """
    groups: list[tuple[str, int]] = []
    authors: dict[str, str] = {}
    times: dict[str, int] = {}
    current: str | None = None

    # Lines end with \n only; file content may hold \f, \x1c or U+2028
    for line in raw.split("\n"):
        if line.startswith("\t"):
            # File content, never metadata
            continue

        match = _GROUP_HEADER_RE.match(line)
        if match:
            current = match.group(1)
            groups.append((current, int(match.group(2))))
            continue

        match = _LINE_HEADER_RE.match(line)
        if match:
            current = match.group(1)
            continue

        if current is None:
            continue

        key, _, value = line.partition(" ")
        if key == "author":
            authors[current] = value
        elif key == "committer-time":
            try:
                times[current] = int(value)
            except ValueError:
                raise ValueError(f"bad committer-time for {current}: {value!r}")

    hunks: list[Hunk] = []
    for commit_id, count in groups:
        if commit_id not in authors:
            raise ValueError(f"no author recorded for commit {commit_id}")
        hunks.append(Hunk(commit_id, authors[commit_id], count))

    commits = {
        commit_id: CommitInfo(commit_id, times[commit_id], author)
        for commit_id, author in authors.items()
        if commit_id in times
    }
    return hunks, commits
