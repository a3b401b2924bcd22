"""Configuration loading and management for grit.

Configuration sources are merged in priority order:
    1. Defaults (defined in GritConfig)
    2. Global config (~/.grit.toml)
    3. Project config (./grit.toml)
    4. Explicit config file
    5. Environment variables (GRIT_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(threads=4, sort="loc")
    >>> config.threads
    4
    >>> config.sort_key
    <SortKey.LOC: 'loc'>
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .analysis.models import SortKey
from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

DEFAULT_THREADS = 10

_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})
_FALSE_VALUES = frozenset({"false", "0", "no", "off"})


@dataclass(frozen=True)
class GritConfig:
    """Configuration for one analysis run.

    Attributes:
        threads: Worker pool size for per-file blame tasks
        sort: Fame sort key ("commits", "loc" or "files")
        include: Glob patterns a file must match (empty = everything)
        exclude: Glob patterns that remove a file
        restrict_authors: Author display names left out of fame/byfile output
        ignore_weekends: Drop Saturday/Sunday commits from by-date counts
        fill_gaps: Insert zero-count days between the first and last bucket
        git_timeout_seconds: Timeout applied to each git subprocess
        verbosity: Logging verbosity level
    """

    threads: int = DEFAULT_THREADS
    sort: str = SortKey.COMMITS.value

    include: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)
    restrict_authors: list[str] = field(default_factory=list)

    ignore_weekends: bool = False
    fill_gaps: bool = True

    git_timeout_seconds: int = 60
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        if self.threads < 1:
            raise InvalidConfigError("threads", self.threads, "must be at least 1")
        if self.git_timeout_seconds < 1:
            raise InvalidConfigError(
                "git_timeout_seconds", self.git_timeout_seconds, "must be at least 1"
            )
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError(
                "verbosity", self.verbosity, "must be one of quiet, normal, verbose"
            )
        # Raises InvalidConfigError for unknown keys
        SortKey.parse(self.sort)

    @property
    def sort_key(self) -> SortKey:
        return SortKey.parse(self.sort)


def load_config(config_file: Optional[Path] = None, **overrides) -> GritConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options never mask file settings.

    Returns:
        Validated GritConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
        InvalidConfigError: If a value fails validation
    """
    merged: dict = {}

    global_config = Path.home() / ".grit.toml"
    if global_config.exists():
        merged.update(_load_toml_section(global_config))

    project_config = Path.cwd() / "grit.toml"
    if project_config.exists():
        merged.update(_load_toml_section(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_section(config_file))

    merged.update(_load_env_vars())
    merged.update(_cli_overrides(overrides))

    try:
        return GritConfig(**merged)
    except TypeError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _cli_overrides(overrides: dict) -> dict:
    """Drop unset values and fold the --verbose/--quiet flags into ``verbosity``."""
    result = {k: v for k, v in overrides.items() if v is not None}
    verbose = result.pop("verbose", False)
    quiet = result.pop("quiet", False)
    # --quiet wins over --verbose, as in logging setup
    if quiet:
        result["verbosity"] = "quiet"
    elif verbose:
        result["verbosity"] = "verbose"
    return result


def _load_toml_section(path: Path) -> dict:
    """Read a TOML file; settings may live at top level or under [grit]."""
    try:
        data = _load_toml_file(path)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")

    section = data.get("grit", data)
    if not isinstance(section, dict):
        raise ConfigurationError(f"Invalid config file '{path}': [grit] must be a table")
    return dict(section)


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from GRIT_* environment variables.

    Supported environment variables:
        GRIT_THREADS: int
        GRIT_SORT: commits/loc/files
        GRIT_INCLUDE / GRIT_EXCLUDE / GRIT_RESTRICT_AUTHORS: comma-delimited
        GRIT_IGNORE_WEEKENDS / GRIT_FILL_GAPS: bool (true/false/1/0)
        GRIT_GIT_TIMEOUT_SECONDS: int
        GRIT_VERBOSITY: quiet/normal/verbose
    """
    type_hints = get_type_hints(GritConfig)

    result: dict[str, Any] = {}

    for field_name in GritConfig.__dataclass_fields__:
        env_key = f"GRIT_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    if origin is list:
        return split_csv(value)

    if type_hint is bool:
        flag = value.strip().lower()
        if flag in _TRUE_VALUES:
            return True
        if flag in _FALSE_VALUES:
            return False
        raise ValueError(f"expected true/false, got {value!r}")

    if type_hint is int:
        return int(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def split_csv(value: Optional[str]) -> list[str]:
    """Split a comma-delimited option into trimmed, non-empty items."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def _load_toml_file(path: Path) -> dict:
    try:
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
