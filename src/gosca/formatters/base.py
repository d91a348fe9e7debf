"""Base formatter interface for gosca output rendering."""

from abc import ABC, abstractmethod

from ..complexity import Stats


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, stats: Stats) -> None:
        """Write stats to stdout."""

    @abstractmethod
    def format(self, stats: Stats) -> str:
        """Return formatted string representation of stats."""
