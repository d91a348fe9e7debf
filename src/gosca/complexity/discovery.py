"""Unit discovery: finds the measurable functions of a parsed file.

Measured units are, in declaration order:

- every top-level function and method
- every function literal that initialises a top-level ``var``/``const``;
  it is named after the first name on its line

Units whose doc comment carries ``//go-sca:ignore`` are dropped. For a
grouped ``var ( ... )`` the group's doc comment applies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from ..logging_config import get_logger
from ..scanning.syntax import (
    Declaration,
    DeclKind,
    NodeKind,
    Position,
    ReceiverType,
    SourceFile,
    SyntaxNode,
)
from .cognitive import cognitive_complexity
from .cyclomatic import cyclomatic_complexity
from .directives import parse_directives
from .stats import Stat, Stats

logger = get_logger(__name__)

BAD_RECEIVER = "BADRECV"


@dataclass(frozen=True)
class FunctionUnit:
    """One measurable function.

    Attributes:
        name: Display name, receiver-qualified for methods
        package: Package the function belongs to
        body: Body block, or None for a declaration without a body
        doc: Doc comment lines that apply to the unit
        position: Position of the ``func`` keyword
        identity: Package-level name used to spot direct recursion
            (None for methods, which cannot be called by bare name)
    """

    name: str
    package: str
    body: Optional[SyntaxNode]
    doc: tuple[str, ...]
    position: Position
    identity: Optional[str]

    def measure(self) -> Stat:
        return Stat(
            pkg_name=self.package,
            func_name=self.name,
            cyclomatic=cyclomatic_complexity(self.body),
            cognitive=cognitive_complexity(self.body, self.identity),
            pos=self.position,
        )


def receiver_string(receiver: Optional[ReceiverType]) -> str:
    """Render a receiver type as "T", "*T", or "BADRECV" for other shapes."""
    if receiver is None:
        return BAD_RECEIVER
    if receiver.shape == "ident":
        return receiver.name
    if receiver.shape == "pointer":
        return "*" + receiver_string(receiver.elem)
    return BAD_RECEIVER


def func_name(decl: Declaration) -> str:
    """Name of a function or method: "(Type).Name" for methods, "Name" otherwise."""
    if decl.kind is DeclKind.METHOD and decl.receiver is not None:
        return f"({receiver_string(decl.receiver)}).{decl.name}"
    return decl.name


def iter_units(source: SourceFile) -> Iterator[FunctionUnit]:
    """Yield every measurable unit of ``source`` in declaration order."""
    for decl in source.declarations:
        if decl.kind in (DeclKind.FUNCTION, DeclKind.METHOD):
            yield FunctionUnit(
                name=func_name(decl),
                package=source.package,
                body=decl.body,
                doc=decl.doc,
                position=decl.position,
                identity=decl.name if decl.kind is DeclKind.FUNCTION else None,
            )
            continue
        for spec in decl.specs:
            if not spec.names:
                continue
            for value in spec.values:
                if value.kind is not NodeKind.FUNCTION_LITERAL:
                    continue
                yield FunctionUnit(
                    name=spec.names[0],
                    package=source.package,
                    body=value.body[0] if value.body else None,
                    doc=decl.doc,
                    position=value.position,
                    identity=spec.names[0],
                )


def analyze_source_file(source: SourceFile) -> Stats:
    """Measure every unit of a parsed file that is not marked ``//go-sca:ignore``."""
    stats = []
    for unit in iter_units(source):
        if parse_directives(unit.doc).has_ignore():
            logger.debug(f"{unit.position}: skipping {unit.name} (ignore directive)")
            continue
        stats.append(unit.measure())
    return Stats(stats)
