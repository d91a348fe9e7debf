"""The ``gosca`` command."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape

from .. import __version__
from ..analyzer import ComplexityAnalyzer
from ..complexity import Metric, Stats
from ..config import AnalysisConfig, load_config
from ..exceptions import GoscaError, InsufficientDataError
from ..formatters import FormatName, get_formatter
from ..logging_config import setup_logging
from . import app
from ._common import ExitCode, console, err_console


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold cyan]gosca[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(ExitCode.SUCCESS)


def _threshold_warnings(stats: Stats, config: AnalysisConfig) -> List[str]:
    """Refactoring warnings for every function above a configured threshold."""
    lines = []
    for stat in stats:
        if config.max_cyclomatic > 0 and stat.cyclomatic > config.max_cyclomatic:
            lines.append(
                f"Function {stat.func_name}() on package {stat.pkg_name} have cyclomatic "
                f"complexity of {stat.cyclomatic} (exceeding {config.max_cyclomatic}) "
                f"consider refactoring."
            )
        if config.max_cognitive > 0 and stat.cognitive > config.max_cognitive:
            lines.append(
                f"Function {stat.func_name}() on package {stat.pkg_name} have cognitive "
                f"complexity of {stat.cognitive} (exceeding {config.max_cognitive}) "
                f"consider refactoring."
            )
    return lines


def _print_average(stats: Stats, metric: Metric, short: bool) -> None:
    try:
        average = stats.average_complexity(metric)
    except InsufficientDataError as e:
        err_console.print(f"[yellow]Warning:[/yellow] {escape(str(e))}")
        return
    typer.echo(f"{average:.3g}" if short else f"Average: {average:.3g}")


def _print_total(stats: Stats, metric: Metric, short: bool) -> None:
    total = stats.total_complexity(metric)
    typer.echo(str(total) if short else f"Total: {total}")


@app.command()
def main(
    paths: List[str] = typer.Argument(
        ...,
        help="Go files or directories (directories are walked recursively)",
        show_default=False,
    ),
    over: Optional[int] = typer.Option(
        None,
        "--over",
        help="Show functions with complexity > N only; exit 1 if any remain",
    ),
    top: Optional[int] = typer.Option(
        None,
        "--top",
        help="Show the N most complex functions only (-1 = all)",
    ),
    avg: bool = typer.Option(False, "--avg", help="Show the average complexity"),
    avg_short: bool = typer.Option(
        False, "--avg-short", help="Show the average complexity without a label"
    ),
    total: bool = typer.Option(False, "--total", help="Show the total complexity"),
    total_short: bool = typer.Option(
        False, "--total-short", help="Show the total complexity without a label"
    ),
    metric: Optional[Metric] = typer.Option(
        None,
        "--metric",
        "-m",
        help="Metric used for sorting, filtering and aggregates",
        case_sensitive=False,
    ),
    max_cyclo: Optional[int] = typer.Option(
        None,
        "--max-cyclo",
        help="Warn about functions with cyclomatic complexity > N",
        min=0,
    ),
    max_cogni: Optional[int] = typer.Option(
        None,
        "--max-cogni",
        help="Warn about functions with cognitive complexity > N",
        min=0,
    ),
    ignore: Optional[str] = typer.Option(
        None,
        "--ignore",
        help="Exclude files matching the given regular expression",
    ),
    output_format: Optional[FormatName] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format",
        case_sensitive=False,
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Abort on the first file with syntax errors instead of skipping it",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "-w",
        "--workers",
        help="Files parsed in parallel",
        min=1,
        max=32,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also write log records to this file",
        dir_okay=False,
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """
    Calculate cyclomatic and cognitive complexities of Go functions.

    Each output line reads
    [dim]cyclomatic: <c>, cognitive: <g>, <package> <function> <file:line:column>[/dim]

    [bold cyan]Examples:[/bold cyan]

      gosca .

      gosca --top 10 --metric cognitive ./pkg

      gosca --over 15 --ignore "_test\\.go$" .

      gosca --max-cyclo 10 --max-cogni 15 ./internal
    """
    try:
        settings = load_config(
            config_file=config,
            ignore_pattern=ignore,
            metric=metric.value if metric else None,
            top=top,
            over=over,
            max_cyclomatic=max_cyclo,
            max_cognitive=max_cogni,
            output_format=output_format.value if output_format else None,
            strict=True if strict else None,
            workers=workers,
            verbose=verbose,
            quiet=quiet,
            log_file=str(log_file) if log_file else None,
        )
    except GoscaError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(ExitCode.BAD_USAGE)

    logger = setup_logging(settings.verbosity, settings.log_file)

    try:
        result = ComplexityAnalyzer.from_config(settings).analyze(paths)
    except GoscaError as e:
        logger.debug("Analysis aborted", exc_info=True)
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(ExitCode.ANALYSIS_FAILED)
    except KeyboardInterrupt:
        logger.info("Analysis interrupted by user")
        err_console.print("\n[yellow]Analysis interrupted[/yellow]")
        raise typer.Exit(ExitCode.INTERRUPTED)

    if settings.threshold_mode:
        for line in _threshold_warnings(result.stats, settings):
            typer.echo(line)
        raise typer.Exit(ExitCode.SUCCESS)

    selected = Metric(settings.metric)
    shown = result.stats.sort_and_filter(top=settings.top, over=settings.over, metric=selected)
    get_formatter(settings.output_format).render(shown)

    if avg or avg_short:
        _print_average(result.stats, selected, short=avg_short)
    if total or total_short:
        _print_total(result.stats, selected, short=total_short)

    if settings.over > 0 and shown:
        raise typer.Exit(ExitCode.OVER_THRESHOLD)
