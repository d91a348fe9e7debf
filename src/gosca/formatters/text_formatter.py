"""Plain text formatter: one canonical line per function."""

from ..complexity import Stats
from .base import BaseFormatter


class TextFormatter(BaseFormatter):
    """Render each Stat as ``cyclomatic: c, cognitive: g, pkg func path:line:col``."""

    def render(self, stats: Stats) -> None:
        for stat in stats:
            print(stat)

    def format(self, stats: Stats) -> str:
        return "\n".join(str(stat) for stat in stats)
