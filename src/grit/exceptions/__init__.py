"""Exception hierarchy for grit."""

from .base import GritError
from .config import ConfigurationError, InvalidConfigError
from .repository import BlameError, FilterPatternError, RepositoryAccessError

__all__ = [
    "GritError",
    "RepositoryAccessError",
    "BlameError",
    "FilterPatternError",
    "ConfigurationError",
    "InvalidConfigError",
]
