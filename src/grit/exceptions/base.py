"""Root of the grit exception hierarchy."""

from typing import Mapping, Optional


class GritError(Exception):
    """Base for every error grit raises on purpose.

    ``details`` carries structured context (path, reason, commit...) that is
    appended to the message when the error is printed.
    """

    def __init__(self, message: str, details: Optional[Mapping[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = "; ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"
