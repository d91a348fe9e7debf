"""Rich terminal formatter for gosca."""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..complexity import Stats
from .base import BaseFormatter

console = Console()


def _score_style(score: int) -> str:
    if score > 15:
        return "red bold"
    elif score > 10:
        return "red"
    elif score > 5:
        return "yellow"
    else:
        return "green"


class RichFormatter(BaseFormatter):
    """Rich table with one row per function."""

    def render(self, stats: Stats) -> None:
        if not stats:
            console.print("[dim]No functions found.[/dim]")
            return
        console.print(self._table(stats))

    def format(self, stats: Stats) -> str:
        # Rich output goes directly to console; return empty string
        self.render(stats)
        return ""

    def _table(self, stats: Stats) -> Table:
        table = Table(title="Function complexity", show_lines=False)
        table.add_column("Cyclomatic", justify="right")
        table.add_column("Cognitive", justify="right")
        table.add_column("Package", style="cyan")
        table.add_column("Function", style="bold", no_wrap=True)
        table.add_column("Position", style="dim", overflow="fold")

        for stat in stats:
            table.add_row(
                f"[{_score_style(stat.cyclomatic)}]{stat.cyclomatic}[/]",
                f"[{_score_style(stat.cognitive)}]{stat.cognitive}[/]",
                escape(stat.pkg_name),
                escape(stat.func_name),
                escape(str(stat.pos)),
            )
        return table
