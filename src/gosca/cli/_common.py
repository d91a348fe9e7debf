"""Shared CLI helpers."""

from rich.console import Console

console = Console()
err_console = Console(stderr=True)


class ExitCode:
    """Process exit codes.

      0: Success
      1: Functions remain above ``--over``, or the analysis failed
      2: Bad usage (no paths, invalid flag values, invalid regex)
    """

    SUCCESS = 0
    OVER_THRESHOLD = 1
    ANALYSIS_FAILED = 1
    BAD_USAGE = 2
    INTERRUPTED = 130
