"""Cyclomatic complexity.

1 for the straight-line path, plus one per decision point:

- ``if``, ``for`` and ``for ... range``
- each non-default ``case`` of a switch or select
- each ``&&`` and ``||`` operator

Function literals are walked like any other node, so a closure's decision
points count towards the function that contains it.
"""

from __future__ import annotations

from typing import Optional

from ..scanning.syntax import NodeKind, SyntaxNode

_DECISION_KINDS = frozenset({NodeKind.CONDITIONAL, NodeKind.LOOP, NodeKind.ITERATION})
_CASE_KINDS = frozenset({NodeKind.MULTIWAY_CASE, NodeKind.SELECT_CASE})


def _decision_points(node: SyntaxNode) -> int:
    if node.kind in _DECISION_KINDS:
        return 1
    if node.kind in _CASE_KINDS:
        # default clauses have no label list / communication
        return 0 if node.is_default else 1
    if node.is_logical:
        return 1
    return 0


def cyclomatic_complexity(body: Optional[SyntaxNode]) -> int:
    """Calculate the cyclomatic complexity of a function body.

    A missing body (a declaration without one) has the baseline complexity 1.
    """
    complexity = 1
    if body is None:
        return complexity
    for node in body.walk():
        complexity += _decision_points(node)
    return complexity
