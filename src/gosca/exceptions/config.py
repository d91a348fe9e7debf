"""Configuration errors: bad config files and bad values."""

from pathlib import Path
from typing import Any

from .base import GoscaError


class ConfigurationError(GoscaError):
    """Base class for problems with how gosca was configured."""


class InvalidPathError(ConfigurationError):
    """A path given in the configuration does not exist or cannot be used."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"{reason}: {path}", details={"path": str(path)})
        self.path = path
        self.reason = reason


class InvalidConfigError(ConfigurationError):
    """A configuration key holds a value gosca cannot use."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(f"{key} = {value!r} is invalid: {reason}", details={"key": key})
        self.key = key
        self.value = value
        self.reason = reason
