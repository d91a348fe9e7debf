"""Syntax models for parsed Go source files.

The normalizer turns a tree-sitter parse tree into these read-only models;
the complexity visitors never see tree-sitter objects.

SourceFile
    package name, path and the ordered top-level declarations.
Declaration
    one top-level ``func`` (function or method) or ``var``/``const`` group.
SyntaxNode
    a typed node of a function body. Every node carries a stable pre-order
    ``index`` that is unique within its file, so visitors can mark nodes by
    index instead of by object identity.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional


class NodeKind(Enum):
    """Closed set of node kinds the complexity visitors distinguish."""

    CONDITIONAL = "Conditional"
    LOOP = "Loop"
    ITERATION = "IterationOverCollection"
    MULTIWAY_BRANCH = "MultiwayBranch"
    MULTIWAY_CASE = "MultiwayBranchCase"
    SELECT = "ConcurrentSelect"
    SELECT_CASE = "ConcurrentSelectCase"
    FUNCTION_LITERAL = "FunctionLiteral"
    JUMP = "JumpStatement"
    LOGICAL_EXPRESSION = "BinaryLogicalExpression"
    CALL = "CallExpression"
    OTHER = "Other"


LOGICAL_AND = "&&"
LOGICAL_OR = "||"


@dataclass(frozen=True)
class Position:
    """Source position: file path, 1-based line and 1-based byte column."""

    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"


@dataclass(frozen=True, eq=False)
class SyntaxNode:
    """A node of a function body.

    Attributes:
        kind: Node kind
        index: Stable pre-order index, unique within the file
        position: Where the node starts
        children: Ordered child nodes
        body: Children entered one nesting level deeper (block of an
            if/for/func literal, case clauses of a switch/select)
        alternative: Else branch of a Conditional
        operator: Operator of a BinaryLogicalExpression
        label: Target label of a JumpStatement
        is_default: True for the default clause of a switch/select
        callee: Package-level identifier a CallExpression invokes
            (None for selectors, locally bound names and other callees)
        grouping: True for a parenthesised expression
    """

    kind: NodeKind
    index: int
    position: Position
    children: tuple[SyntaxNode, ...] = ()
    body: tuple[SyntaxNode, ...] = ()
    alternative: Optional[SyntaxNode] = None
    operator: Optional[str] = None
    label: Optional[str] = None
    is_default: bool = False
    callee: Optional[str] = None
    grouping: bool = False

    @property
    def header(self) -> tuple[SyntaxNode, ...]:
        """Children visited at the node's own nesting (init, condition, tag...)."""
        nested = {n.index for n in self.body}
        if self.alternative is not None:
            nested.add(self.alternative.index)
        return tuple(c for c in self.children if c.index not in nested)

    @property
    def is_logical(self) -> bool:
        return self.kind is NodeKind.LOGICAL_EXPRESSION and self.operator in (
            LOGICAL_AND,
            LOGICAL_OR,
        )

    def walk(self) -> Iterator[SyntaxNode]:
        """Yield this node and every descendant in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


class DeclKind(Enum):
    """Top-level declaration kinds."""

    FUNCTION = "function"
    METHOD = "method"
    VALUE = "value"


@dataclass(frozen=True)
class ReceiverType:
    """Shape of a method receiver type.

    ``shape`` is "ident" for ``T``, "pointer" for ``*X`` (with ``elem`` set)
    and "other" for anything else (generic, parenthesised, qualified...).
    """

    shape: str
    name: str = ""
    elem: Optional[ReceiverType] = None


@dataclass(frozen=True)
class ValueSpec:
    """One ``name1, name2 = value1, value2`` line of a var/const declaration."""

    names: tuple[str, ...]
    values: tuple[SyntaxNode, ...]


@dataclass(frozen=True)
class Declaration:
    """A top-level declaration.

    Attributes:
        kind: Function, method or value group
        name: Function or method name ("" for value groups)
        position: Position of the ``func``/``var``/``const`` keyword
        doc: Leading comment lines (the group's comments for value groups)
        body: Function body block (None for body-less declarations and values)
        receiver: Receiver type for methods; None when the receiver list is empty
        specs: Value specs of a var/const group
    """

    kind: DeclKind
    name: str
    position: Position
    doc: tuple[str, ...] = ()
    body: Optional[SyntaxNode] = None
    receiver: Optional[ReceiverType] = None
    specs: tuple[ValueSpec, ...] = ()


@dataclass(frozen=True)
class SourceFile:
    """A parsed Go file."""

    path: str
    package: str
    declarations: tuple[Declaration, ...] = field(default_factory=tuple)

    @property
    def declaration_count(self) -> int:
        return len(self.declarations)
