"""Complexity analysis over files and directories.

Parse failures are recovered per file by default: the file is logged,
recorded in :attr:`AnalysisResult.errors` and skipped. With ``strict``
the first unparsable file aborts the run.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Iterable, Optional, Pattern, Sequence

from .complexity import Stats, analyze_source_file
from .config import AnalysisConfig
from .exceptions import FileAccessError, GoscaError, ParsingError
from .logging_config import get_logger
from .scanning import GoTreeNormalizer, iter_source_files, read_source

logger = get_logger(__name__)


@dataclass
class AnalysisResult:
    """Outcome of a run.

    Attributes:
        stats: Complexity of every measured function, in discovery order
        files_analyzed: Files parsed successfully
        errors: Unreadable paths and unparsable files that were skipped
    """

    stats: Stats = field(default_factory=Stats)
    files_analyzed: int = 0
    errors: list[GoscaError] = field(default_factory=list)

    @property
    def files_failed(self) -> int:
        return len(self.errors)


@dataclass
class _FileOutcome:
    path: str
    stats: Optional[Stats] = None
    error: Optional[GoscaError] = None


class ComplexityAnalyzer:
    """Runs unit discovery over every Go file under a set of paths."""

    def __init__(
        self,
        ignore: Optional[Pattern[str]] = None,
        strict: bool = False,
        workers: int = 1,
        extensions: Sequence[str] = (".go",),
    ) -> None:
        self.ignore = ignore
        self.strict = strict
        self.workers = workers
        self.extensions = tuple(extensions)
        self._local = threading.local()

    @classmethod
    def from_config(cls, config: AnalysisConfig) -> ComplexityAnalyzer:
        return cls(
            ignore=config.ignore_regex,
            strict=config.strict,
            workers=config.workers,
            extensions=config.file_extensions,
        )

    def _normalizer(self) -> GoTreeNormalizer:
        # tree-sitter parsers must not be shared between threads
        normalizer = getattr(self._local, "normalizer", None)
        if normalizer is None:
            normalizer = GoTreeNormalizer()
            self._local.normalizer = normalizer
        return normalizer

    def analyze_file(self, path: str) -> Stats:
        """Measure one file.

        Raises:
            FileAccessError: If the file cannot be read
            ParsingError: If the file has syntax errors
        """
        source = self._normalizer().parse_file(read_source(path), path)
        stats = analyze_source_file(source)
        logger.debug(f"{path}: {len(stats)} functions")
        return stats

    def _try_file(self, path: str) -> _FileOutcome:
        try:
            return _FileOutcome(path, stats=self.analyze_file(path))
        except FileAccessError as e:
            return _FileOutcome(path, error=e)
        except ParsingError as e:
            if self.strict:
                raise
            return _FileOutcome(path, error=e)

    def analyze(self, paths: Iterable[str]) -> AnalysisResult:
        """Measure every function in the given files and directories.

        Raises:
            ParsingError: In strict mode, for the first unparsable file
        """
        result = AnalysisResult()
        files = list(
            iter_source_files(paths, self.ignore, self.extensions, errors=result.errors)
        )

        if self.workers > 1 and len(files) > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                # map() yields in submission order, keeping discovery order
                outcomes = list(executor.map(self._try_file, files))
        else:
            outcomes = [self._try_file(path) for path in files]

        collected = []
        for outcome in outcomes:
            if outcome.error is not None:
                logger.warning(str(outcome.error))
                result.errors.append(outcome.error)
                continue
            result.files_analyzed += 1
            collected.extend(outcome.stats or ())

        result.stats = Stats(collected)
        logger.info(
            f"Analyzed {result.files_analyzed} files, {len(result.stats)} functions, "
            f"{result.files_failed} skipped"
        )
        return result
