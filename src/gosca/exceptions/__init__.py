"""Exceptions raised by gosca.

GoscaError
    AnalysisError
        FileAccessError        a source path is missing or unreadable
        ParsingError           a source file has syntax errors
        InsufficientDataError  an aggregate over no functions
    ConfigurationError
        InvalidPathError       e.g. a missing config file
        InvalidConfigError     a config value fails validation
"""

from .analysis import (
    AnalysisError,
    FileAccessError,
    InsufficientDataError,
    ParsingError,
)
from .base import GoscaError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)

__all__ = [
    "GoscaError",
    "AnalysisError",
    "FileAccessError",
    "ParsingError",
    "InsufficientDataError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
