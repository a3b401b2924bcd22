"""Configuration exceptions: settings files, CLI values, date bounds."""

from typing import Any

from .base import GritError


class ConfigurationError(GritError):
    """Bad user input; the CLI exits with a usage error."""


class InvalidConfigError(ConfigurationError):
    """A single setting has an unusable value."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid value for {key}: {value!r}",
            details={"reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason
