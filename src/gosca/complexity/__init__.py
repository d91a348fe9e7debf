"""Per-function complexity metrics."""

from .cognitive import CognitiveVisitor, cognitive_complexity
from .cyclomatic import cyclomatic_complexity
from .directives import DIRECTIVE_PREFIX, Directives, parse_directives
from .discovery import BAD_RECEIVER, FunctionUnit, analyze_source_file, func_name, iter_units
from .stats import Metric, Stat, Stats

__all__ = [
    "cyclomatic_complexity",
    "cognitive_complexity",
    "CognitiveVisitor",
    "DIRECTIVE_PREFIX",
    "Directives",
    "parse_directives",
    "BAD_RECEIVER",
    "FunctionUnit",
    "analyze_source_file",
    "func_name",
    "iter_units",
    "Metric",
    "Stat",
    "Stats",
]
