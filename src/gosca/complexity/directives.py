"""In-source directives.

A directive is a comment line in a declaration's doc comment of the form::

    //go-sca:ignore

Only ``ignore`` has an effect today; other keywords are kept so callers can
inspect them.
"""

from __future__ import annotations

from typing import Iterable, Optional

DIRECTIVE_PREFIX = "//go-sca:"
IGNORE = "ignore"


class Directives(frozenset):
    """Set of directive keywords attached to a declaration."""

    def has_ignore(self) -> bool:
        return self.is_present(IGNORE)

    def is_present(self, name: str) -> bool:
        return name in self


def parse_directives(comments: Optional[Iterable[str]]) -> Directives:
    """Extract directive keywords from comment lines.

    Args:
        comments: Comment lines including their ``//`` marker, or None

    Returns:
        The keywords of every line that starts with the directive prefix
    """
    if comments is None:
        return Directives()
    return Directives(
        line[len(DIRECTIVE_PREFIX):].strip()
        for line in comments
        if line.startswith(DIRECTIVE_PREFIX)
    )
