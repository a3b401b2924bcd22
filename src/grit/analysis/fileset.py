"""Select tracked files with include/exclude glob filters.

Patterns follow shell-glob rules (``*``, ``?``, ``[...]``) and match the
whole path relative to the repository root; ``*`` may cross directory
separators. ``**`` must form a whole path component and may match zero
directories, so ``src/**/*.py`` also matches ``src/main.py``.
"""

from __future__ import annotations

import fnmatch
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from ..exceptions import FilterPatternError
from ..logging_config import get_logger

if TYPE_CHECKING:
    from ..vcs.repository import GitRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class FilePattern:
    source: str
    alternatives: tuple[str, ...]

    def matches(self, path: str) -> bool:
        return any(fnmatch.fnmatchcase(path, alt) for alt in self.alternatives)


def compile_pattern(pattern: str) -> FilePattern:
    """Validate one glob and expand its zero-directory ``**`` forms.

    Raises:
        FilterPatternError: Empty pattern, unterminated ``[`` or a ``**``
            that is not a whole path component
    """
    if not pattern or not pattern.strip():
        raise FilterPatternError(pattern, "pattern is empty")

    _check_brackets(pattern)

    for component in pattern.split("/"):
        if "**" in component and component != "**":
            raise FilterPatternError(
                pattern, "recursive wildcard '**' must be a whole path component"
            )

    alternatives = {pattern}
    changed = True
    while changed:
        changed = False
        for alt in list(alternatives):
            for collapsed in _collapse_recursive(alt):
                if collapsed not in alternatives:
                    alternatives.add(collapsed)
                    changed = True

    return FilePattern(source=pattern, alternatives=tuple(sorted(alternatives)))


def compile_patterns(patterns: Optional[Iterable[str]]) -> list[FilePattern]:
    """Compile every pattern up front so a bad glob fails before any work."""
    if not patterns:
        return []
    return [compile_pattern(p) for p in patterns]


def select_files(
    files: Iterable[str],
    include: Optional[Sequence[str]] = None,
    exclude: Optional[Sequence[str]] = None,
) -> list[str]:
    """Keep files matching any include pattern (all if none) and no exclude pattern."""
    includes = compile_patterns(include)
    excludes = compile_patterns(exclude)

    selected = []
    for path in files:
        if includes and not any(p.matches(path) for p in includes):
            continue
        if any(p.matches(path) for p in excludes):
            continue
        selected.append(path)
    return selected


def list_files(
    repo: "GitRepository",
    include: Optional[Sequence[str]] = None,
    exclude: Optional[Sequence[str]] = None,
) -> list[str]:
    """Tracked files of ``repo`` after include/exclude filtering."""
    # Validate before touching the repository
    compile_patterns(include)
    compile_patterns(exclude)

    tracked = repo.list_tracked_files()
    selected = select_files(tracked, include, exclude)
    logger.info("Selected %d of %d tracked files", len(selected), len(tracked))
    return selected


def _check_brackets(pattern: str) -> None:
    i = 0
    while i < len(pattern):
        if pattern[i] == "[":
            j = i + 1
            if j < len(pattern) and pattern[j] in "!^":
                j += 1
            # A ']' right after the opening bracket is a literal member
            if j < len(pattern) and pattern[j] == "]":
                j += 1
            close = pattern.find("]", j)
            if close == -1:
                raise FilterPatternError(pattern, "unterminated character class '['")
            i = close + 1
        else:
            i += 1


def _collapse_recursive(pattern: str) -> list[str]:
    """Variants of ``pattern`` where one ``**`` component matches zero directories."""
    parts = pattern.split("/")
    variants = []
    for idx, part in enumerate(parts):
        if part == "**" and len(parts) > 1:
            variants.append("/".join(parts[:idx] + parts[idx + 1 :]))
    return [v for v in variants if v]
