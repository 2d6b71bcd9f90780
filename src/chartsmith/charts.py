"""Line, bar and pie chart renderers.

Every renderer is a pure function from a :class:`ChartSpec` to a standalone
SVG document string. Renderers never raise for well-typed input: missing
numbers count as 0, a missing title drops the heading, and empty colors fall
back to the default palette.

Example:
    from chartsmith import ChartSpec, ChartType, generate_chart_svg

    spec = ChartSpec(
        chart_type=ChartType.BAR,
        data=[{"month": "Jan", "score": 40}, {"month": "Feb", "score": 85}],
        x_key="month",
        y_keys=["score"],
        title="Scores",
    )
    svg = generate_chart_svg(spec)
"""

from __future__ import annotations

import logging
from typing import Callable

from chartsmith.base import (
    CHART_HEIGHT,
    CHART_WIDTH,
    ChartSpec,
    ChartType,
    LegendEntry,
    Margins,
    Point,
    color_for,
    format_label,
    js_round,
)
from chartsmith.scale import LinearScale, grid_lines, x_position
from chartsmith import shapes

logger = logging.getLogger(__name__)


LINE_GRID_DIVISIONS = 5
BAR_GRID_DIVISIONS = 4

LINE_LABEL_LIMIT = 10
BAR_LABEL_LIMIT = 11
PIE_LABEL_LIMIT = 18


def _top_margin(spec: ChartSpec) -> int:
    return 38 if spec.title else 18


def line_margins(spec: ChartSpec) -> Margins:
    return Margins(left=55, right=25, top=_top_margin(spec), bottom=48)


def bar_margins(spec: ChartSpec) -> Margins:
    return Margins(left=55, right=25, top=_top_margin(spec), bottom=52)


def _series_legend(spec: ChartSpec, margins: Margins) -> list[str]:
    """Right-hand legend, drawn only when several series share the plot."""
    if len(spec.y_keys) <= 1:
        return []
    palette = spec.palette
    entries = [LegendEntry(color_for(palette, i), key) for i, key in enumerate(spec.y_keys)]
    return shapes.legend(entries, x=margins.left + margins.inner_width() + 8, top=margins.top)


# =============================================================================
# Line Chart
# =============================================================================


def render_line_chart(spec: ChartSpec) -> str:
    """Render one polyline per series over a shared 0-based value axis."""
    margins = line_margins(spec)
    iw, ih = margins.inner_width(), margins.inner_height()
    scale = LinearScale.for_values(spec.all_values(), ih)
    palette = spec.palette
    count = len(spec.data)

    body = shapes.grid(grid_lines(scale.max_v, ih, LINE_GRID_DIVISIONS), iw)

    for ki, key in enumerate(spec.y_keys):
        points = [
            Point(x_position(i, count, iw), scale.y(value))
            for i, value in enumerate(spec.values_for(key))
        ]
        body.extend(shapes.polyline_series(points, color_for(palette, ki)))

    positions = [x_position(i, count, iw) for i in range(count)]
    labels = [format_label(row.get(spec.x_key), LINE_LABEL_LIMIT) for row in spec.data]
    body.extend(shapes.x_labels(positions, labels, ih))
    body.extend(shapes.axis_lines(iw, ih))

    return shapes.svg_document([
        shapes.background(),
        shapes.title_text(spec.title),
        shapes.plot_group(margins.left, margins.top, body),
        *_series_legend(spec, margins),
    ])


# =============================================================================
# Bar Chart
# =============================================================================


def render_bar_chart(spec: ChartSpec) -> str:
    """Render grouped bars, one group per row and one bar per series."""
    margins = bar_margins(spec)
    iw, ih = margins.inner_width(), margins.inner_height()
    scale = LinearScale.for_values(spec.all_values(), ih)
    palette = spec.palette
    series_count = len(spec.y_keys)
    layout = shapes.bar_layout(len(spec.data), series_count, iw)

    body = shapes.grid(grid_lines(scale.max_v, ih, BAR_GRID_DIVISIONS), iw)
    series = [spec.values_for(key) for key in spec.y_keys]
    labels = []

    for i, row in enumerate(spec.data):
        for ki, values in enumerate(series):
            value = values[i]
            x = layout.bar_x(i, ki)
            top = scale.y(value)
            width = max(layout.bar_width - shapes.BAR_GAP, 0)
            body.append(shapes.bar_rect(x, top, scale.extent(value), width, color_for(palette, ki)))
            if layout.show_values:
                body.append(shapes.bar_value_label(x, top, width, value))
        labels.append(
            shapes.text_element(
                layout.group_center(i, series_count),
                ih + 20,
                format_label(row.get(spec.x_key), BAR_LABEL_LIMIT),
                anchor="middle",
            )
        )

    body.extend(labels)
    body.extend(shapes.axis_lines(iw, ih))

    return shapes.svg_document([
        shapes.background(),
        shapes.title_text(spec.title),
        shapes.plot_group(margins.left, margins.top, body),
        *_series_legend(spec, margins),
    ])


# =============================================================================
# Pie Chart
# =============================================================================


def render_pie_chart(spec: ChartSpec) -> str:
    """Render one sector per row sized by the first value field.

    The legend always lists every slice with its rounded percentage share.
    """
    has_title = bool(spec.title)
    cx = CHART_WIDTH * 0.3
    cy = CHART_HEIGHT / 2 + (8 if has_title else 0)
    radius = min(cx * 0.72, (CHART_HEIGHT - (50 if has_title else 30)) / 2)
    legend_x = CHART_WIDTH * 0.58

    value_key = spec.y_keys[0] if spec.y_keys else ""
    palette = spec.palette
    slices = shapes.pie_slices(spec.values_for(value_key))

    paths = []
    entries = []
    for i, (row, piece) in enumerate(zip(spec.data, slices)):
        color = color_for(palette, i)
        paths.append(shapes.sector_path(cx, cy, radius, piece, color))
        name = format_label(row.get(spec.x_key), PIE_LABEL_LIMIT)
        entries.append(LegendEntry(color, f"{name}: {js_round(piece.fraction * 100)}%"))

    legend = shapes.legend(
        entries,
        x=legend_x,
        top=36 if has_title else 20,
        row_height=22,
        swatch=12,
        font_size=11,
        text_offset=(17, 10),
    )

    return shapes.svg_document([
        shapes.background(),
        shapes.title_text(spec.title),
        *paths,
        *legend,
    ])


# =============================================================================
# Dispatch
# =============================================================================


_RENDERERS: dict[ChartType, Callable[[ChartSpec], str]] = {
    ChartType.LINE: render_line_chart,
    ChartType.BAR: render_bar_chart,
    ChartType.PIE: render_pie_chart,
}


def supported_chart_types() -> list[str]:
    """Chart type tags understood by :func:`generate_chart_svg`."""
    return [chart_type.value for chart_type in _RENDERERS]


def generate_chart_svg(spec: ChartSpec) -> str:
    """Render ``spec`` with the renderer for its chart type.

    Unknown chart types produce an empty string rather than an error;
    callers treat that as "unsupported chart type".
    """
    renderer = _RENDERERS.get(spec.chart_type)
    if renderer is None:
        logger.debug(f"Unsupported chart type: {spec.chart_type!r}")
        return ""
    return renderer(spec)
