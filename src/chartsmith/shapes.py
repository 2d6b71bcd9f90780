"""SVG primitive builders shared by the chart renderers.

Each builder returns a list of SVG element strings. Renderers concatenate
them into a document with :func:`svg_document`. All text passed in is
escaped here, color tokens included, so callers hand over raw values.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from chartsmith.base import (
    CHART_HEIGHT,
    CHART_WIDTH,
    FONT_FAMILY,
    LegendEntry,
    Point,
    escape_xml,
    fmt,
    format_number,
)
from chartsmith.scale import GridLine


AXIS_COLOR = "#d1d5db"
GRID_COLOR = "#e5e7eb"
MUTED_TEXT = "#9ca3af"
LEGEND_TEXT = "#374151"
VALUE_TEXT = "#4b5563"
TITLE_TEXT = "#1f2937"

MAX_BAR_WIDTH = 28
MIN_LABELLED_BAR_WIDTH = 20
GROUP_PADDING_RATIO = 0.18
BAR_GAP = 2


# =============================================================================
# Document Envelope
# =============================================================================


def svg_document(
    body: Iterable[str],
    width: int = CHART_WIDTH,
    height: int = CHART_HEIGHT,
) -> str:
    """Wrap body elements in a standalone SVG document."""
    lines = [f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}">']
    lines.extend(f"  {element}" for element in body if element)
    lines.append("</svg>")
    return "\n".join(lines)


def background(width: int = CHART_WIDTH, height: int = CHART_HEIGHT) -> str:
    return f'<rect width="{width}" height="{height}" fill="white" rx="6"/>'


def title_text(title: str | None, width: int = CHART_WIDTH) -> str:
    """Centered chart heading, or an empty string without a title."""
    if not title:
        return ""
    return (
        f'<text x="{format_number(width / 2)}" y="22" font-size="13" font-weight="bold" '
        f'fill="{TITLE_TEXT}" text-anchor="middle" font-family="{FONT_FAMILY}">'
        f"{escape_xml(title)}</text>"
    )


def plot_group(left: float, top: float, elements: Iterable[str]) -> str:
    """Translate plot-area elements by the chart margins."""
    inner = "\n    ".join(element for element in elements if element)
    return (
        f'<g transform="translate({format_number(left)},{format_number(top)})">\n'
        f"    {inner}\n  </g>"
    )


def text_element(
    x: float,
    y: float,
    content: str,
    *,
    size: int = 10,
    fill: str = MUTED_TEXT,
    anchor: str | None = None,
) -> str:
    anchor_attr = f' text-anchor="{anchor}"' if anchor else ""
    return (
        f'<text x="{fmt(x)}" y="{fmt(y)}" font-size="{size}" fill="{fill}"{anchor_attr} '
        f'font-family="{FONT_FAMILY}">{escape_xml(content)}</text>'
    )


# =============================================================================
# Axes and Grid
# =============================================================================


def axis_lines(inner_width: float, inner_height: float) -> list[str]:
    """Y axis on the left edge and X axis along the baseline."""
    iw, ih = format_number(inner_width), format_number(inner_height)
    return [
        f'<line x1="0" y1="0" x2="0" y2="{ih}" stroke="{AXIS_COLOR}" stroke-width="1"/>',
        f'<line x1="0" y1="{ih}" x2="{iw}" y2="{ih}" stroke="{AXIS_COLOR}" stroke-width="1"/>',
    ]


def grid(lines: Iterable[GridLine], inner_width: float) -> list[str]:
    """Horizontal guide lines with their value annotations."""
    elements = []
    iw = format_number(inner_width)
    for line in lines:
        y = fmt(line.y)
        elements.append(
            f'<line x1="0" y1="{y}" x2="{iw}" y2="{y}" stroke="{GRID_COLOR}" stroke-width="1"/>'
        )
        elements.append(text_element(-8, line.y + 4, str(line.value), anchor="end"))
    return elements


def x_labels(positions: Sequence[float], labels: Sequence[str], inner_height: float) -> list[str]:
    return [
        text_element(x, inner_height + 20, label, anchor="middle")
        for x, label in zip(positions, labels)
    ]


# =============================================================================
# Line Series
# =============================================================================


def polyline_series(points: Sequence[Point], color: str) -> list[str]:
    """A connected line through ``points`` plus one marker per point."""
    coords = " ".join(f"{fmt(p.x)},{fmt(p.y)}" for p in points)
    paint = escape_xml(color)
    elements = [
        f'<polyline points="{coords}" fill="none" stroke="{paint}" stroke-width="2.5" '
        f'stroke-linejoin="round" stroke-linecap="round"/>'
    ]
    for p in points:
        elements.append(
            f'<circle cx="{fmt(p.x)}" cy="{fmt(p.y)}" r="4" fill="{paint}" '
            f'stroke="white" stroke-width="1.5"/>'
        )
    return elements


# =============================================================================
# Grouped Bars
# =============================================================================


@dataclass(frozen=True)
class BarLayout:
    """Horizontal packing of one bar group per row.

    Attributes:
        group_width: Width allotted to each row.
        padding: Space left empty on each side of a group.
        bar_width: Slot width of a single bar, capped at ``MAX_BAR_WIDTH``.
    """

    group_width: float
    padding: float
    bar_width: float

    @property
    def show_values(self) -> bool:
        return self.bar_width >= MIN_LABELLED_BAR_WIDTH

    def group_x(self, row: int) -> float:
        return row * self.group_width + self.padding

    def bar_x(self, row: int, series: int) -> float:
        return self.group_x(row) + series * self.bar_width

    def group_center(self, row: int, series_count: int) -> float:
        return self.group_x(row) + series_count * self.bar_width / 2


def bar_layout(row_count: int, series_count: int, inner_width: float) -> BarLayout:
    """Split the plot width into groups, and groups into bars."""
    group_width = inner_width / max(row_count, 1)
    padding = group_width * GROUP_PADDING_RATIO
    usable = group_width - padding * 2
    bar_width = min(usable / max(series_count, 1), MAX_BAR_WIDTH)
    return BarLayout(group_width=group_width, padding=padding, bar_width=bar_width)


def bar_rect(x: float, top: float, height: float, width: float, color: str) -> str:
    return (
        f'<rect x="{fmt(x)}" y="{fmt(top)}" width="{fmt(width)}" height="{fmt(height)}" '
        f'fill="{escape_xml(color)}" rx="2"/>'
    )


def bar_value_label(x: float, top: float, width: float, value: float) -> str:
    return text_element(
        x + width / 2, top - 3, format_number(value), size=9, fill=VALUE_TEXT, anchor="middle"
    )


# =============================================================================
# Pie Sectors
# =============================================================================


@dataclass(frozen=True)
class PieSlice:
    """Angular extent of one slice, in radians."""

    start: float
    end: float
    fraction: float

    @property
    def large_arc(self) -> int:
        return 1 if self.fraction > 0.5 else 0

    @property
    def degrees(self) -> float:
        return math.degrees(self.end - self.start)


def pie_slices(values: Sequence[float]) -> list[PieSlice]:
    """Lay slices out clockwise starting at 12 o'clock.

    A zero total is replaced by 1, so every slice collapses to zero width
    instead of dividing by zero.
    """
    total = sum(values) or 1
    slices = []
    angle = -math.pi / 2
    for value in values:
        fraction = value / total
        end = angle + fraction * 2 * math.pi
        slices.append(PieSlice(start=angle, end=end, fraction=fraction))
        angle = end
    return slices


def sector_path(cx: float, cy: float, radius: float, piece: PieSlice, color: str) -> str:
    """Closed wedge from the center along the arc of ``piece``."""
    x1 = cx + radius * math.cos(piece.start)
    y1 = cy + radius * math.sin(piece.start)
    x2 = cx + radius * math.cos(piece.end)
    y2 = cy + radius * math.sin(piece.end)
    d = (
        f"M{fmt(cx)},{fmt(cy)} L{fmt(x1)},{fmt(y1)} "
        f"A{fmt(radius)},{fmt(radius)} 0 {piece.large_arc},1 {fmt(x2)},{fmt(y2)} Z"
    )
    return f'<path d="{d}" fill="{escape_xml(color)}" stroke="white" stroke-width="2"/>'


# =============================================================================
# Legends
# =============================================================================


def legend(
    entries: Sequence[LegendEntry],
    x: float,
    top: float,
    *,
    row_height: int = 18,
    swatch: int = 10,
    font_size: int = 9,
    text_offset: tuple[int, int] = (14, 9),
) -> list[str]:
    """Vertical legend of color swatches and labels."""
    elements = []
    for i, entry in enumerate(entries):
        y = top + i * row_height
        elements.append(
            f'<rect x="{format_number(x)}" y="{format_number(y)}" width="{swatch}" '
            f'height="{swatch}" fill="{escape_xml(entry.color)}" rx="2"/>'
        )
        dx, dy = text_offset
        elements.append(
            f'<text x="{format_number(x + dx)}" y="{format_number(y + dy)}" '
            f'font-size="{font_size}" fill="{LEGEND_TEXT}" font-family="{FONT_FAMILY}">'
            f"{escape_xml(entry.text)}</text>"
        )
    return elements
