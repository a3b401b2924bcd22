"""Repository-related exceptions: opening, blaming, file filtering."""

from pathlib import Path
from typing import Optional, Union

from .base import GritError


class RepositoryAccessError(GritError):
    """Raised when a repository cannot be opened or has no resolvable HEAD.

    Always fatal: nothing downstream can run without a readable history.
    """

    def __init__(self, path: Union[Path, str], reason: str):
        super().__init__(
            f"Cannot access repository: {path}",
            details={"path": str(path), "reason": reason},
        )
        self.path = path
        self.reason = reason


class BlameError(GritError):
    """Raised when blame fails for a single file."""

    def __init__(self, filepath: str, reason: str, commit: Optional[str] = None):
        details = {"filepath": filepath, "reason": reason}
        if commit:
            details["commit"] = commit

        super().__init__(f"Failed to blame {filepath}", details=details)
        self.filepath = filepath
        self.reason = reason
        self.commit = commit


class FilterPatternError(GritError):
    """Raised when an include/exclude glob is malformed."""

    def __init__(self, pattern: str, reason: str):
        super().__init__(
            f"Invalid file pattern: {pattern!r}",
            details={"pattern": pattern, "reason": reason},
        )
        self.pattern = pattern
        self.reason = reason
