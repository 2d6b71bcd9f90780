"""Axis scaling and coordinate mapping for cartesian charts."""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from chartsmith.base import js_round


PERCENT_AXIS_MAX = 100


def axis_max(values: Iterable[float]) -> float:
    """Upper bound of the value axis.

    Datasets whose largest value is at most 100 share a stable 0-100 axis.
    Larger datasets round their maximum up to the next multiple of 10.
    """
    raw_max = max([*values, 1])
    if raw_max <= PERCENT_AXIS_MAX:
        return PERCENT_AXIS_MAX
    return math.ceil(raw_max / 10) * 10


def x_position(index: int, count: int, inner_width: float) -> float:
    """Horizontal pixel offset of row ``index`` among ``count`` rows."""
    return index / max(count - 1, 1) * inner_width


@dataclass(frozen=True)
class LinearScale:
    """Linear map from ``[min_v, max_v]`` onto ``[inner_height, 0]``.

    Values outside the domain are not clamped.
    """

    min_v: float
    max_v: float
    inner_height: float

    @classmethod
    def for_values(cls, values: Iterable[float], inner_height: float) -> "LinearScale":
        return cls(0, axis_max(values), inner_height)

    def y(self, value: float) -> float:
        span = self.max_v - self.min_v
        return self.inner_height - ((value - self.min_v) / span) * self.inner_height

    def extent(self, value: float) -> float:
        """Pixel length of a bar rising from ``min_v`` to ``value``."""
        return self.inner_height - self.y(value)


@dataclass(frozen=True)
class GridLine:
    """A horizontal guide line and its axis annotation."""

    y: float
    value: int


def grid_lines(max_v: float, inner_height: float, divisions: int) -> Iterator[GridLine]:
    """Evenly spaced guide lines from the top of the plot to its baseline."""
    for i in range(divisions + 1):
        y = inner_height / divisions * i
        yield GridLine(y=y, value=js_round(max_v * (1 - i / divisions)))
