"""JSON formatter for gosca."""

import json

from ..complexity import Stats
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render stats as a JSON list of objects."""

    def render(self, stats: Stats) -> None:
        print(self.format(stats))

    def format(self, stats: Stats) -> str:
        data = [stat.to_dict() for stat in stats]
        return json.dumps(data, indent=2)
