"""Normalizer: converts tree-sitter Go parse trees to SourceFile.

This module owns everything that knows about the tree-sitter Go grammar:
node type names, field names, comment placement. The complexity rules only
see the models from :mod:`gosca.scanning.syntax`.
"""

from __future__ import annotations

import itertools
from pathlib import Path
from typing import Any, Iterable, Iterator, Optional

from ..exceptions import ParsingError
from ..logging_config import get_logger
from .syntax import (
    LOGICAL_AND,
    LOGICAL_OR,
    Declaration,
    DeclKind,
    NodeKind,
    Position,
    ReceiverType,
    SourceFile,
    SyntaxNode,
    ValueSpec,
)
from .treesitter_parser import GoParser, first_error

logger = get_logger(__name__)

# Nodes that open a lexical scope in Go
_SCOPE_TYPES = frozenset(
    {
        "block",
        "if_statement",
        "for_statement",
        "expression_switch_statement",
        "type_switch_statement",
        "select_statement",
        "expression_case",
        "type_case",
        "default_case",
        "communication_case",
        "func_literal",
    }
)

_BRANCH_TYPES = frozenset({"expression_switch_statement", "select_statement"})
_CASE_TYPES = frozenset({"expression_case", "type_case", "default_case", "communication_case"})
_JUMP_TYPES = frozenset(
    {"break_statement", "continue_statement", "goto_statement", "fallthrough_statement"}
)


def _text(node: Any) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def _identifiers(node: Any) -> Iterator[str]:
    """Yield identifier names directly listed in an expression_list (or a lone identifier)."""
    if node is None:
        return
    if node.type == "identifier":
        yield _text(node)
        return
    for child in node.named_children:
        if child.type == "identifier":
            yield _text(child)


def _parameter_names(param_list: Any) -> Iterator[str]:
    """Yield the names bound by a parameter_list."""
    if param_list is None or param_list.type != "parameter_list":
        return
    for decl in param_list.named_children:
        for name in decl.children_by_field_name("name"):
            if name.type == "identifier":
                yield _text(name)


def _has_token(node: Any, token: str) -> bool:
    return any(not c.is_named and c.type == token for c in node.children)


class _BodyConverter:
    """Converts one function body, tracking local scopes.

    Local scopes decide whether a bare identifier call refers to a
    package-level function or to a local binding that shadows it.
    """

    def __init__(self, path: str, counter: Iterator[int], params: Iterable[str] = ()) -> None:
        self._path = path
        self._counter = counter
        self._scopes: list[set[str]] = [set(params)]

    def _position(self, node: Any) -> Position:
        row, column = node.start_point
        return Position(self._path, row + 1, column + 1)

    def _bind(self, names: Iterable[str]) -> None:
        self._scopes[-1].update(n for n in names if n and n != "_")

    def _is_local(self, name: str) -> bool:
        return any(name in scope for scope in self._scopes)

    def convert(self, node: Any, parent_type: str = "") -> SyntaxNode:
        index = next(self._counter)
        node_type = node.type
        opens_scope = node_type in _SCOPE_TYPES
        if opens_scope:
            self._scopes.append(set())
        if node_type == "func_literal":
            self._bind(_parameter_names(node.child_by_field_name("parameters")))
            self._bind(_parameter_names(node.child_by_field_name("result")))
        elif node_type == "type_switch_statement":
            self._bind(_identifiers(node.child_by_field_name("alias")))

        callee = self._resolve_callee(node) if node_type == "call_expression" else None

        pairs = [
            (child, self.convert(child, node_type))
            for child in node.named_children
            if child.type != "comment"
        ]
        self._bind_declared_names(node)
        if opens_scope:
            self._scopes.pop()

        children = tuple(converted for _, converted in pairs)
        kind, extra = self._classify(node, parent_type, pairs)
        return SyntaxNode(
            kind=kind,
            index=index,
            position=self._position(node),
            children=children,
            callee=callee,
            **extra,
        )

    def _resolve_callee(self, node: Any) -> Optional[str]:
        function = node.child_by_field_name("function")
        if function is None or function.type != "identifier":
            return None
        name = _text(function)
        if self._is_local(name):
            return None
        return name

    def _bind_declared_names(self, node: Any) -> None:
        """Record names introduced by ``node`` in the current scope.

        Called after the node's children were converted, so a declaration's
        own right-hand side still sees the outer binding.
        """
        node_type = node.type
        if node_type == "short_var_declaration":
            self._bind(_identifiers(node.child_by_field_name("left")))
        elif node_type in ("var_spec", "const_spec"):
            self._bind(_text(n) for n in node.children_by_field_name("name"))
        elif node_type in ("range_clause", "receive_statement"):
            if _has_token(node, ":="):
                self._bind(_identifiers(node.child_by_field_name("left")))

    def _classify(self, node: Any, parent_type: str, pairs: list) -> tuple[NodeKind, dict]:
        node_type = node.type

        def converted(field_node: Any) -> Optional[SyntaxNode]:
            if field_node is None:
                return None
            for raw, syn in pairs:
                if raw.id == field_node.id:
                    return syn
            return None

        if node_type == "if_statement":
            body = converted(node.child_by_field_name("consequence"))
            return NodeKind.CONDITIONAL, {
                "body": (body,) if body is not None else (),
                "alternative": converted(node.child_by_field_name("alternative")),
            }

        if node_type == "for_statement":
            is_range = any(raw.type == "range_clause" for raw, _ in pairs)
            body = converted(node.child_by_field_name("body"))
            kind = NodeKind.ITERATION if is_range else NodeKind.LOOP
            return kind, {"body": (body,) if body is not None else ()}

        # A type switch stays OTHER: only its case clauses are scored
        if node_type in _BRANCH_TYPES:
            cases = tuple(syn for raw, syn in pairs if raw.type in _CASE_TYPES)
            kind = NodeKind.SELECT if node_type == "select_statement" else NodeKind.MULTIWAY_BRANCH
            return kind, {"body": cases}

        if node_type in ("expression_case", "type_case"):
            return NodeKind.MULTIWAY_CASE, {}

        if node_type == "communication_case":
            return NodeKind.SELECT_CASE, {}

        if node_type == "default_case":
            kind = NodeKind.SELECT_CASE if parent_type == "select_statement" else NodeKind.MULTIWAY_CASE
            return kind, {"is_default": True}

        if node_type == "func_literal":
            body = converted(node.child_by_field_name("body"))
            return NodeKind.FUNCTION_LITERAL, {"body": (body,) if body is not None else ()}

        if node_type in _JUMP_TYPES:
            label = next((_text(c) for c in node.named_children if c.type == "label_name"), None)
            return NodeKind.JUMP, {"label": label}

        if node_type == "binary_expression":
            operator = node.child_by_field_name("operator")
            op = operator.type if operator is not None else ""
            if op in (LOGICAL_AND, LOGICAL_OR):
                return NodeKind.LOGICAL_EXPRESSION, {"operator": op}
            return NodeKind.OTHER, {}

        if node_type == "call_expression":
            return NodeKind.CALL, {}

        if node_type == "parenthesized_expression":
            return NodeKind.OTHER, {"grouping": True}

        return NodeKind.OTHER, {}


class _CommentTracker:
    """Groups top-level comments the way the Go parser does.

    A comment group is a run of comments where each one starts at most one
    line after the previous one ends. A group is a declaration's doc comment
    when it ends on the line right before the declaration. A comment that
    shares a line with the preceding code is a trailing comment and never
    part of a doc comment.
    """

    def __init__(self) -> None:
        self._group: list[Any] = []
        self._last_code_row = -1

    def comment(self, node: Any) -> None:
        start_row = node.start_point[0]
        if start_row == self._last_code_row:
            self._group = []
            return
        if self._group and start_row > self._group[-1].end_point[0] + 1:
            self._group = []
        self._group.append(node)

    def code(self, node: Any) -> tuple[str, ...]:
        """Consume the pending group; return it if it documents ``node``."""
        doc: tuple[str, ...] = ()
        if self._group and self._group[-1].end_point[0] + 1 == node.start_point[0]:
            doc = tuple(_text(c) for c in self._group)
        self._group = []
        self._last_code_row = node.end_point[0]
        return doc


class GoTreeNormalizer:
    """Converts Go source into :class:`SourceFile`.

    Usage:
        normalizer = GoTreeNormalizer()
        source = normalizer.parse_file(code_bytes, "pkg/file.go")
    """

    def __init__(self, parser: Optional[GoParser] = None) -> None:
        self._parser = parser or GoParser()

    def parse_file(self, code: bytes, path: str) -> SourceFile:
        """Parse Go source bytes.

        Raises:
            ParsingError: If the source contains syntax errors
        """
        tree = self._parser.parse(code)
        root = tree.root_node
        error = first_error(root)
        if error is not None:
            row, column = error.start_point
            reason = f"missing {error.type}" if error.is_missing else "syntax error"
            raise ParsingError(Path(path), reason, location=(row + 1, column + 1))
        try:
            return self.normalize(root, path)
        except RecursionError:
            raise ParsingError(Path(path), "nesting too deep")

    def normalize(self, root: Any, path: str) -> SourceFile:
        """Convert an error-free tree-sitter ``source_file`` node."""
        counter = itertools.count()
        comments = _CommentTracker()
        package = ""
        declarations: list[Declaration] = []

        for node in root.named_children:
            if node.type == "comment":
                comments.comment(node)
                continue
            doc = comments.code(node)
            if node.type == "package_clause":
                package = next(
                    (_text(c) for c in node.named_children if c.type == "package_identifier"), ""
                )
            elif node.type == "function_declaration":
                declarations.append(self._function(node, path, doc, counter))
            elif node.type == "method_declaration":
                declarations.append(self._method(node, path, doc, counter))
            elif node.type in ("var_declaration", "const_declaration"):
                declarations.append(self._values(node, path, doc, counter))

        logger.debug(f"{path}: package {package}, {len(declarations)} declarations")
        return SourceFile(path=path, package=package, declarations=tuple(declarations))

    # ── Declarations ───────────────────────────────────────────────

    @staticmethod
    def _position(node: Any, path: str) -> Position:
        row, column = node.start_point
        return Position(path, row + 1, column + 1)

    def _convert_body(
        self, node: Any, path: str, counter: Iterator[int], params: Iterable[str]
    ) -> Optional[SyntaxNode]:
        body = node.child_by_field_name("body")
        if body is None:
            return None
        return _BodyConverter(path, counter, params).convert(body, node.type)

    def _function(self, node: Any, path: str, doc: tuple[str, ...], counter: Iterator[int]) -> Declaration:
        params = [
            *_parameter_names(node.child_by_field_name("parameters")),
            *_parameter_names(node.child_by_field_name("result")),
        ]
        return Declaration(
            kind=DeclKind.FUNCTION,
            name=_text(node.child_by_field_name("name")),
            position=self._position(node, path),
            doc=doc,
            body=self._convert_body(node, path, counter, params),
        )

    def _method(self, node: Any, path: str, doc: tuple[str, ...], counter: Iterator[int]) -> Declaration:
        receiver_list = node.child_by_field_name("receiver")
        params = [
            *_parameter_names(receiver_list),
            *_parameter_names(node.child_by_field_name("parameters")),
            *_parameter_names(node.child_by_field_name("result")),
        ]
        return Declaration(
            kind=DeclKind.METHOD,
            name=_text(node.child_by_field_name("name")),
            position=self._position(node, path),
            doc=doc,
            body=self._convert_body(node, path, counter, params),
            receiver=self._receiver(receiver_list),
        )

    def _receiver(self, receiver_list: Any) -> Optional[ReceiverType]:
        if receiver_list is None:
            return None
        fields = [
            c
            for c in receiver_list.named_children
            if c.type in ("parameter_declaration", "variadic_parameter_declaration")
        ]
        if not fields:
            return None
        return self._receiver_type(fields[0].child_by_field_name("type"))

    def _receiver_type(self, node: Any) -> ReceiverType:
        if node is None:
            return ReceiverType("other")
        if node.type == "type_identifier":
            return ReceiverType("ident", name=_text(node))
        if node.type == "pointer_type":
            inner = next((c for c in node.named_children if c.type != "comment"), None)
            return ReceiverType("pointer", elem=self._receiver_type(inner))
        return ReceiverType("other")

    def _values(self, node: Any, path: str, doc: tuple[str, ...], counter: Iterator[int]) -> Declaration:
        spec_type = "var_spec" if node.type == "var_declaration" else "const_spec"
        specs = [self._value_spec(spec, path, counter) for spec in self._iter_specs(node, spec_type)]
        return Declaration(
            kind=DeclKind.VALUE,
            name="",
            position=self._position(node, path),
            doc=doc,
            specs=tuple(specs),
        )

    @staticmethod
    def _iter_specs(node: Any, spec_type: str) -> Iterator[Any]:
        # Grouped declarations nest their specs in a list node on newer grammars
        for child in node.named_children:
            if child.type == spec_type:
                yield child
            elif child.type.endswith("_spec_list"):
                yield from (c for c in child.named_children if c.type == spec_type)

    def _value_spec(self, spec: Any, path: str, counter: Iterator[int]) -> ValueSpec:
        names = tuple(_text(n) for n in spec.children_by_field_name("name"))
        value_list = spec.child_by_field_name("value")
        values: list[SyntaxNode] = []
        if value_list is not None:
            for expr in value_list.named_children:
                if expr.type == "comment":
                    continue
                values.append(_BodyConverter(path, counter).convert(expr, spec.type))
        return ValueSpec(names=names, values=tuple(values))
