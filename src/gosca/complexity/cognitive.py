"""Cognitive complexity.

Follows the structure of SonarSource's cognitive complexity for Go:

- ``if``, ``switch``, ``select``, ``for`` add 1 plus the current nesting
  level, and their bodies are one level deeper; a type switch adds nothing
  and does not nest its cases
- ``else if`` and ``else`` add a flat 1; an ``else if`` chain does not
  nest further
- function literals add nothing themselves but nest their body
- labelled ``break``/``continue``/``goto`` add 1
- each run of identical ``&&``/``||`` operators adds 1, each switch
  between them adds another 1
- a direct call to the enclosing function by name adds 1

Recursion through a method selector or through another function is not
detected.
"""

from __future__ import annotations

from typing import Callable, Iterable, NamedTuple, Optional

from ..scanning.syntax import NodeKind, SyntaxNode


class _Work(NamedTuple):
    node: SyntaxNode
    nesting: int
    is_else: bool = False


class CognitiveVisitor:
    """Single-use visitor; create one per function body.

    The traversal runs on an explicit work stack, so arbitrarily deep trees
    (long ``&&`` chains, deeply nested blocks) never exhaust the Python stack.
    Each handler scores one node and returns the work items for its children.
    """

    def __init__(self, identity: Optional[str] = None) -> None:
        self._identity = identity
        self.complexity = 0
        self._scored_exprs: set[int] = set()

    def visit(self, node: SyntaxNode) -> None:
        stack = [_Work(node, 0)]
        while stack:
            work = stack.pop()
            handler = self._HANDLERS.get(work.node.kind, CognitiveVisitor._visit_other)
            # reversed so children are scored in source order
            stack.extend(reversed(handler(self, work)))

    # ── helpers ────────────────────────────────────────────────────

    @staticmethod
    def _at(nodes: Iterable[SyntaxNode], nesting: int) -> list[_Work]:
        return [_Work(n, nesting) for n in nodes]

    # ── node handlers ──────────────────────────────────────────────

    def _visit_other(self, work: _Work) -> list[_Work]:
        return self._at(work.node.children, work.nesting)

    def _visit_conditional(self, work: _Work) -> list[_Work]:
        node, nesting = work.node, work.nesting
        if work.is_else:
            self.complexity += 1
        else:
            self.complexity += nesting + 1

        children = self._at(node.header, nesting) + self._at(node.body, nesting + 1)
        alternative = node.alternative
        if alternative is None:
            return children
        if alternative.kind is NodeKind.CONDITIONAL:
            # else if: flat increment, same nesting as the chain head
            children.append(_Work(alternative, nesting, is_else=True))
        else:
            self.complexity += 1
            children.append(_Work(alternative, nesting + 1))
        return children

    def _visit_structure(self, work: _Work) -> list[_Work]:
        """switch, select, for and range loops."""
        node, nesting = work.node, work.nesting
        self.complexity += nesting + 1
        return self._at(node.header, nesting) + self._at(node.body, nesting + 1)

    def _visit_func_literal(self, work: _Work) -> list[_Work]:
        node, nesting = work.node, work.nesting
        return self._at(node.header, nesting) + self._at(node.body, nesting + 1)

    def _visit_jump(self, work: _Work) -> list[_Work]:
        if work.node.label:
            self.complexity += 1
        return self._visit_other(work)

    def _visit_logical(self, work: _Work) -> list[_Work]:
        node = work.node
        if node.is_logical and node.index not in self._scored_exprs:
            last_op = None
            for op in self._collect_operators(node):
                if op != last_op:
                    self.complexity += 1
                    last_op = op
        return self._visit_other(work)

    def _visit_call(self, work: _Work) -> list[_Work]:
        if self._identity is not None and work.node.callee == self._identity:
            self.complexity += 1
        return self._visit_other(work)

    def _collect_operators(self, expr: SyntaxNode) -> list[str]:
        """Flatten a tree of &&/|| operators (through parentheses) in source order."""
        operators: list[str] = []
        pending: list[object] = [expr]
        while pending:
            item = pending.pop()
            if isinstance(item, str):
                operators.append(item)
                continue
            assert isinstance(item, SyntaxNode)
            self._scored_exprs.add(item.index)
            if item.is_logical and item.children:
                # popped as: left, operator, right
                pending.extend((item.children[-1], item.operator, item.children[0]))
            elif item.grouping and item.children:
                pending.append(item.children[0])
        return operators

    _HANDLERS: dict[NodeKind, Callable[[CognitiveVisitor, _Work], list[_Work]]] = {
        NodeKind.CONDITIONAL: _visit_conditional,
        NodeKind.MULTIWAY_BRANCH: _visit_structure,
        NodeKind.SELECT: _visit_structure,
        NodeKind.LOOP: _visit_structure,
        NodeKind.ITERATION: _visit_structure,
        NodeKind.FUNCTION_LITERAL: _visit_func_literal,
        NodeKind.JUMP: _visit_jump,
        NodeKind.LOGICAL_EXPRESSION: _visit_logical,
        NodeKind.CALL: _visit_call,
    }


def cognitive_complexity(body: Optional[SyntaxNode], identity: Optional[str] = None) -> int:
    """Calculate the cognitive complexity of a function body.

    Args:
        body: Function body block (None scores 0)
        identity: Package-level name of the function, used to detect direct
            recursion; None for methods

    Returns:
        Cognitive complexity (>= 0)
    """
    if body is None:
        return 0
    visitor = CognitiveVisitor(identity)
    visitor.visit(body)
    return visitor.complexity
