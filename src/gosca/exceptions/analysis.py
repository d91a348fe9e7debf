"""Errors raised while reading, parsing and aggregating Go sources."""

from pathlib import Path
from typing import Optional, Tuple

from .base import GoscaError


class AnalysisError(GoscaError):
    """Base class for errors during an analysis run."""


class FileAccessError(AnalysisError):
    """A source path is missing or cannot be read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(f"cannot read {filepath}: {reason}", details={"file": str(filepath)})
        self.filepath = filepath
        self.reason = reason


class ParsingError(AnalysisError):
    """A source file has syntax errors (or is too deeply nested to convert)."""

    def __init__(
        self,
        filepath: Path,
        reason: str,
        location: Optional[Tuple[int, int]] = None,
        language: str = "go",
    ):
        where = str(filepath)
        if location is not None:
            where = f"{filepath}:{location[0]}:{location[1]}"
        super().__init__(
            f"cannot parse {where}: {reason}",
            details={"file": str(filepath), "language": language},
        )
        self.filepath = filepath
        self.language = language
        self.reason = reason
        self.location = location


class InsufficientDataError(AnalysisError):
    """An aggregate was requested over too few functions."""

    def __init__(self, reason: str, minimum_required: Optional[int] = None):
        details = {}
        if minimum_required is not None:
            details["minimum_required"] = str(minimum_required)
        super().__init__(reason, details=details)
        self.reason = reason
        self.minimum_required = minimum_required
