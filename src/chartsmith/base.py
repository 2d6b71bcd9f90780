"""Base types and constants for chart rendering.

This module contains the chart type enum, the immutable ChartSpec input
structure, canvas geometry constants and the small text/number helpers
shared by every renderer.
"""

from __future__ import annotations

import html
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


Value = Union[int, float, str, None]
Row = Mapping[str, Value]


# =============================================================================
# Enums
# =============================================================================


class ChartType(str, Enum):
    """Supported chart types.

    The values are the wire tags used in JSON chart descriptions.
    """

    LINE = "LineChart"
    BAR = "BarChart"
    PIE = "PieChart"


_CHART_TAGS = frozenset(t.value for t in ChartType)


# =============================================================================
# Constants
# =============================================================================


CHART_WIDTH = 500
CHART_HEIGHT = 270

DEFAULT_COLORS: tuple[str, ...] = (
    "#FFE600", "#2E2E38", "#4CAF50", "#FF5252", "#2196F3", "#FF9800",
)

FONT_FAMILY = "Arial,sans-serif"


# =============================================================================
# Exceptions
# =============================================================================


class ChartSpecError(ValueError):
    """Raised when a chart description cannot be built from caller input."""


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class Margins:
    """Plot margins around the inner drawing area."""

    left: float
    right: float
    top: float
    bottom: float

    def inner_width(self, width: float = CHART_WIDTH) -> float:
        return width - self.left - self.right

    def inner_height(self, height: float = CHART_HEIGHT) -> float:
        return height - self.top - self.bottom


@dataclass(frozen=True)
class ChartSpec:
    """Declarative description of a chart to render.

    Attributes:
        chart_type: Chart type or its tag. Known tags become ``ChartType``;
            unknown strings are kept so that the dispatcher can report them
            instead of failing here.
        data: Ordered rows mapping field name to a number or text.
        x_key: Field holding the category label of each row.
        y_keys: Fields plotted as series. Pie charts only use the first.
        title: Optional heading.
        colors: Optional color tokens, cycled by series or slice index.
    """

    chart_type: ChartType | str
    data: tuple[Row, ...] = ()
    x_key: str = ""
    y_keys: tuple[str, ...] = ()
    title: str | None = None
    colors: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        # Accept lists from callers but store tuples
        object.__setattr__(self, "data", tuple(dict(row) for row in self.data))
        object.__setattr__(self, "y_keys", tuple(self.y_keys))
        if self.colors is not None:
            object.__setattr__(self, "colors", tuple(self.colors))
        if not isinstance(self.chart_type, ChartType) and self.chart_type in _CHART_TAGS:
            object.__setattr__(self, "chart_type", ChartType(self.chart_type))

    @property
    def palette(self) -> tuple[str, ...]:
        """Colors in effect for this spec."""
        return resolve_colors(self.colors)

    def values_for(self, key: str) -> list[float]:
        """Numeric values of ``key`` across all rows, missing as 0."""
        return [coerce_number(row.get(key)) for row in self.data]

    def all_values(self) -> list[float]:
        """Numeric values of every series, in ``y_keys`` order."""
        values: list[float] = []
        for key in self.y_keys:
            values.extend(self.values_for(key))
        return values


@dataclass(frozen=True)
class Point:
    """A point in SVG user space."""

    x: float
    y: float


@dataclass(frozen=True)
class LegendEntry:
    """One legend line: a color swatch and its text."""

    color: str
    text: str


# =============================================================================
# Helpers
# =============================================================================


def resolve_colors(colors: Sequence[str] | None) -> tuple[str, ...]:
    """Return ``colors`` or the default palette when absent or empty."""
    if colors:
        return tuple(colors)
    return DEFAULT_COLORS


def color_for(palette: Sequence[str], index: int) -> str:
    """Positional color assignment, cycling through the palette."""
    return palette[index % len(palette)]


def coerce_number(value: Any) -> float:
    """Convert a row value to a float.

    Missing values, non-finite or out-of-range numbers and text that does
    not parse as a number become 0.
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return 0.0
    else:
        text = str(value).strip()
        if not text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def js_round(value: float) -> int:
    """Round half up, the way browsers round chart annotations."""
    return math.floor(value + 0.5)


def format_number(value: float) -> str:
    """Format a number as label text: ``40.0`` becomes ``40``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def fmt(value: float) -> str:
    """Format a coordinate with one decimal place."""
    return f"{value:.1f}"


def format_label(value: Any, limit: int) -> str:
    """Text of a category label, truncated to ``limit`` characters."""
    if value is None:
        text = "undefined"
    elif isinstance(value, bool):
        text = "true" if value else "false"
    elif isinstance(value, float):
        text = format_number(value)
    else:
        text = str(value)
    return text[:limit]


def escape_xml(text: str) -> str:
    """Escape markup-reserved characters for embedding in SVG."""
    return html.escape(text, quote=True)
