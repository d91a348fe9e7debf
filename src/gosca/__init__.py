"""
gosca - cyclomatic and cognitive complexity of Go functions.

Parses Go sources with tree-sitter and scores every function, method and
top-level function value.
"""

__version__ = "0.3.0"

from .analyzer import AnalysisResult, ComplexityAnalyzer
from .api import analyze, analyze_source
from .complexity import Metric, Stat, Stats

__all__ = [
    "analyze",
    "analyze_source",
    "AnalysisResult",
    "ComplexityAnalyzer",
    "Metric",
    "Stat",
    "Stats",
]
