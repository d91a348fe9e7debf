"""Complexity results and aggregates."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Iterable, Iterator, Sequence, Union, overload

from ..exceptions import InsufficientDataError
from ..scanning.syntax import Position


class Metric(Enum):
    """Which complexity a sort, filter or aggregate looks at."""

    CYCLOMATIC = "cyclomatic"
    COGNITIVE = "cognitive"


@dataclass(frozen=True)
class Stat:
    """Complexity of one function."""

    pkg_name: str
    func_name: str
    cyclomatic: int
    cognitive: int
    pos: Position

    def value(self, metric: Metric) -> int:
        return self.cyclomatic if metric is Metric.CYCLOMATIC else self.cognitive

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["pos"] = str(self.pos)
        return data

    def __str__(self) -> str:
        return (
            f"cyclomatic: {self.cyclomatic}, cognitive: {self.cognitive}, "
            f"{self.pkg_name} {self.func_name} {self.pos}"
        )


class Stats(Sequence[Stat]):
    """Immutable, ordered collection of Stat in discovery order."""

    def __init__(self, stats: Iterable[Stat] = ()) -> None:
        self._stats: tuple[Stat, ...] = tuple(stats)

    @overload
    def __getitem__(self, index: int) -> Stat: ...

    @overload
    def __getitem__(self, index: slice) -> Stats: ...

    def __getitem__(self, index: Union[int, slice]) -> Union[Stat, Stats]:
        if isinstance(index, slice):
            return Stats(self._stats[index])
        return self._stats[index]

    def __len__(self) -> int:
        return len(self._stats)

    def __iter__(self) -> Iterator[Stat]:
        return iter(self._stats)

    def __add__(self, other: Iterable[Stat]) -> Stats:
        return Stats((*self._stats, *other))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Stats):
            return self._stats == other._stats
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._stats)

    def __repr__(self) -> str:
        return f"Stats({list(self._stats)!r})"

    def total_complexity(self, metric: Metric = Metric.CYCLOMATIC) -> int:
        """Sum of the metric over all functions."""
        return sum(stat.value(metric) for stat in self._stats)

    def average_complexity(self, metric: Metric = Metric.CYCLOMATIC) -> float:
        """Mean of the metric over all functions.

        Raises:
            InsufficientDataError: If there are no functions to average
        """
        if not self._stats:
            raise InsufficientDataError("no functions to average", minimum_required=1)
        return self.total_complexity(metric) / len(self._stats)

    def sort_and_filter(self, top: int = -1, over: int = 0, metric: Metric = Metric.CYCLOMATIC) -> Stats:
        """Return the functions sorted by descending complexity, then truncated.

        Functions with equal complexity keep their discovery order.

        Args:
            top: Keep at most this many functions; negative keeps all
            over: Keep only functions with complexity greater than this;
                0 or less keeps all, since every function has complexity >= 1
            metric: Metric to sort and filter by
        """
        ranked = sorted(
            enumerate(self._stats),
            key=lambda item: (-item[1].value(metric), item[0]),
        )
        result: list[Stat] = []
        for i, (_, stat) in enumerate(ranked):
            if i == top:
                break
            if over > 0 and stat.value(metric) <= over:
                break
            result.append(stat)
        return Stats(result)
