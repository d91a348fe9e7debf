"""Report renderers for gosca: plain text, JSON and a rich table."""

from enum import Enum
from typing import Dict, Type

from .base import BaseFormatter
from .json_formatter import JsonFormatter
from .rich_formatter import RichFormatter
from .text_formatter import TextFormatter


class FormatName(Enum):
    """Names accepted by :func:`get_formatter`."""

    TEXT = "text"
    JSON = "json"
    RICH = "rich"


FORMATTERS: Dict[str, Type[BaseFormatter]] = {
    "text": TextFormatter,
    "json": JsonFormatter,
    "rich": RichFormatter,
}


def get_formatter(name: str) -> BaseFormatter:
    """Instantiate the formatter registered as ``name``.

    Raises:
        ValueError: If no formatter has that name
    """
    try:
        return FORMATTERS[name]()
    except KeyError:
        choices = ", ".join(sorted(FORMATTERS))
        raise ValueError(f"Unknown formatter: {name!r} (available: {choices})") from None


__all__ = [
    "BaseFormatter",
    "TextFormatter",
    "JsonFormatter",
    "RichFormatter",
    "FORMATTERS",
    "FormatName",
    "get_formatter",
]
