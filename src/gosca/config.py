"""Configuration loading and management for gosca.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.gosca.toml)
    3. Project config (./gosca.toml)
    4. Explicit config file
    5. Environment variables (GOSCA_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(top=10, metric="cognitive")
    >>> config.top
    10
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Literal, Optional, Pattern

from .exceptions import GoscaError, InvalidConfigError, InvalidPathError

Verbosity = Literal["quiet", "normal", "verbose"]
MetricName = Literal["cyclomatic", "cognitive"]
OutputFormat = Literal["text", "json", "rich"]

CONFIG_FILENAME = "gosca.toml"
ENV_PREFIX = "GOSCA_"

# Fields restricted to a fixed set of values
_CHOICES: dict[str, tuple[str, ...]] = {
    "metric": ("cyclomatic", "cognitive"),
    "output_format": ("text", "json", "rich"),
    "verbosity": ("quiet", "normal", "verbose"),
}


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for a complexity run.

    Attributes:
        File selection:
            ignore_pattern: Regular expression; matching file paths are skipped
            file_extensions: Suffixes picked up when walking directories

        Execution:
            workers: Number of files parsed concurrently (1 = sequential)
            strict: Abort on the first unparsable file instead of skipping it

        Reporting:
            metric: Metric used for sorting, filtering and aggregates
            top: Keep only the N most complex functions (-1 = all)
            over: Keep only functions with complexity > N (0 = all)
            max_cyclomatic: Warn about functions above this cyclomatic score (0 = off)
            max_cognitive: Warn about functions above this cognitive score (0 = off)
            output_format: Report renderer
            verbosity: Logging verbosity level
            log_file: Path that also receives every log record (None = stderr only)
    """

    ignore_pattern: Optional[str] = None
    file_extensions: list[str] = field(default_factory=lambda: [".go"])

    workers: int = 1
    strict: bool = False

    metric: MetricName = "cyclomatic"
    top: int = -1
    over: int = 0
    max_cyclomatic: int = 0
    max_cognitive: int = 0
    output_format: OutputFormat = "text"
    verbosity: Verbosity = "normal"
    log_file: Optional[str] = None

    def __post_init__(self) -> None:
        """Reject values the analysis cannot work with."""
        for name, allowed in _CHOICES.items():
            value = getattr(self, name)
            if value not in allowed:
                raise InvalidConfigError(name, value, f"expected one of {', '.join(allowed)}")
        if self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")
        for name in ("max_cyclomatic", "max_cognitive"):
            if getattr(self, name) < 0:
                raise InvalidConfigError(name, getattr(self, name), "must be 0 (off) or positive")
        if not self.file_extensions:
            raise InvalidConfigError("file_extensions", self.file_extensions, "must not be empty")
        if self.ignore_pattern:
            try:
                re.compile(self.ignore_pattern)
            except re.error as e:
                raise InvalidConfigError("ignore_pattern", self.ignore_pattern, str(e))

    @property
    def ignore_regex(self) -> Optional[Pattern[str]]:
        """Compiled ignore pattern, or None when nothing is ignored."""
        if not self.ignore_pattern:
            return None
        return re.compile(self.ignore_pattern)

    @property
    def threshold_mode(self) -> bool:
        """True when either refactoring threshold is set."""
        return self.max_cyclomatic > 0 or self.max_cognitive > 0


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Build the effective configuration.

    Args:
        config_file: Explicit TOML file, read after the discovered ones
        **overrides: Values from CLI flags or API callers. ``None`` means
            "not given" and never masks a file or environment value;
            ``verbose``/``quiet`` flags map onto ``verbosity``.

    Returns:
        A validated AnalysisConfig

    Raises:
        InvalidPathError: If ``config_file`` does not exist
        InvalidConfigError: If a value fails validation
        GoscaError: If a file cannot be parsed or names an unknown key
    """
    if config_file is not None and not config_file.exists():
        raise InvalidPathError(config_file, "config file not found")

    values: dict[str, Any] = {}
    for candidate in (Path.home() / ".gosca.toml", Path.cwd() / CONFIG_FILENAME, config_file):
        if candidate is not None and candidate.is_file():
            values.update(_load_toml_file(candidate))
    values.update(_load_env_vars())

    verbose = overrides.pop("verbose", False)
    quiet = overrides.pop("quiet", False)
    values.update((key, value) for key, value in overrides.items() if value is not None)
    if quiet:
        values["verbosity"] = "quiet"
    elif verbose:
        values["verbosity"] = "verbose"

    unknown = sorted(set(values) - set(AnalysisConfig.__dataclass_fields__))
    if unknown:
        raise GoscaError(f"Unknown configuration keys: {', '.join(unknown)}")
    try:
        return AnalysisConfig(**values)
    except TypeError as e:
        # e.g. a string where a number belongs
        raise GoscaError(f"Invalid configuration: {e}")


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"expected a boolean, got {value!r}")


def _parse_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


# GOSCA_<FIELD> environment variables and how to read them
_ENV_PARSERS: dict[str, Callable[[str], Any]] = {
    "ignore_pattern": str,
    "file_extensions": _parse_list,
    "workers": int,
    "strict": _parse_bool,
    "metric": str,
    "top": int,
    "over": int,
    "max_cyclomatic": int,
    "max_cognitive": int,
    "output_format": str,
    "verbosity": str,
    "log_file": str,
}


def _load_env_vars() -> dict[str, Any]:
    """Read ``GOSCA_*`` variables, e.g. ``GOSCA_TOP=10`` or ``GOSCA_FILE_EXTENSIONS=.go,.gox``.

    Raises:
        InvalidConfigError: If a variable cannot be converted
    """
    values: dict[str, Any] = {}
    for name, parse in _ENV_PARSERS.items():
        env_key = ENV_PREFIX + name.upper()
        raw = os.environ.get(env_key)
        if raw is None:
            continue
        try:
            values[name] = parse(raw)
        except ValueError as e:
            raise InvalidConfigError(env_key, raw, str(e))
    return values


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Read a config file: either a ``[gosca]`` table or top-level keys.

    Raises:
        GoscaError: If the file cannot be read or is not valid TOML
    """
    try:
        import tomllib
    except ModuleNotFoundError:  # Python < 3.11
        import tomli as tomllib  # type: ignore[no-redef]

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        raise GoscaError(f"Invalid config file '{path}': {e}")

    table = data.get("gosca", data)
    if not isinstance(table, dict):
        raise GoscaError(f"Invalid config file '{path}': [gosca] must be a table")
    return dict(table)
