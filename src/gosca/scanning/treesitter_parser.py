"""Tree-sitter parser wrapper for Go.

Usage:
    parser = GoParser()
    tree = parser.parse(code_bytes)
    if tree.root_node.has_error:
        ...

Parser instances are not thread-safe; create one per thread.
"""

from __future__ import annotations

from typing import Any, Optional

import tree_sitter
import tree_sitter_go

GO_LANGUAGE = tree_sitter.Language(tree_sitter_go.language())


class GoParser:
    """Wrapper around a tree-sitter parser configured for Go."""

    def __init__(self) -> None:
        self._parser = tree_sitter.Parser(GO_LANGUAGE)

    def parse(self, code: bytes) -> tree_sitter.Tree:
        """Parse Go source and return the concrete syntax tree.

        tree-sitter never raises on malformed input; it embeds ERROR and
        MISSING nodes instead. Use :func:`first_error` to locate them.
        """
        return self._parser.parse(code)


def first_error(node: Any) -> Optional[Any]:
    """Return the first ERROR or MISSING node below ``node`` in source order."""
    if not node.has_error:
        return None
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "ERROR" or current.is_missing:
            return current
        stack.extend(c for c in reversed(current.children) if c.has_error or c.is_missing)
    return None
