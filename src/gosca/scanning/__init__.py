"""Go source scanning: path expansion, tree-sitter parsing, normalisation."""

from .normalizer import GoTreeNormalizer
from .scanner import is_ignored, iter_source_files, read_source
from .syntax import (
    Declaration,
    DeclKind,
    NodeKind,
    Position,
    ReceiverType,
    SourceFile,
    SyntaxNode,
    ValueSpec,
)
from .treesitter_parser import GoParser

__all__ = [
    # Syntax models
    "NodeKind",
    "Position",
    "SyntaxNode",
    "DeclKind",
    "ReceiverType",
    "ValueSpec",
    "Declaration",
    "SourceFile",
    # Parsing
    "GoParser",
    "GoTreeNormalizer",
    # Paths
    "is_ignored",
    "iter_source_files",
    "read_source",
]
