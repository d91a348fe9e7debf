"""Public API for gosca.

Example:
    >>> from gosca import analyze
    >>> result = analyze(["./pkg"], ignore_pattern="_test\\.go$")
    >>> for stat in result.stats.sort_and_filter(top=10):
    ...     print(stat)

    >>> from gosca import analyze_source
    >>> stats = analyze_source("package p\\nfunc f() {}\\n")
    >>> stats[0].cyclomatic
    1
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Union

from .analyzer import AnalysisResult, ComplexityAnalyzer
from .complexity import Stats, analyze_source_file
from .config import load_config
from .logging_config import get_logger
from .scanning import GoTreeNormalizer

logger = get_logger(__name__)


def analyze(
    paths: Union[str, Iterable[str]],
    config_file: Optional[Path] = None,
    **overrides,
) -> AnalysisResult:
    """Measure every Go function under ``paths``.

    Args:
        paths: Files and/or directories (directories are walked recursively)
        config_file: Optional explicit config file path
        **overrides: Configuration overrides (e.g. ignore_pattern, strict, workers)

    Returns:
        AnalysisResult with the Stats in discovery order

    Raises:
        GoscaError: If configuration is invalid
        ParsingError: If ``strict`` is set and a file cannot be parsed
    """
    if isinstance(paths, str):
        paths = [paths]
    config = load_config(config_file=config_file, **overrides)
    logger.debug(f"Configuration loaded: {config}")
    return ComplexityAnalyzer.from_config(config).analyze(paths)


def analyze_source(code: Union[str, bytes], path: str = "<input>") -> Stats:
    """Measure the functions of a single Go source text.

    Raises:
        ParsingError: If the source has syntax errors
    """
    if isinstance(code, str):
        code = code.encode("utf-8")
    source = GoTreeNormalizer().parse_file(code, path)
    return analyze_source_file(source)
