"""Assemble chart specs from previously fetched datasets.

Charts are often requested after the rows they plot were already loaded
under a name (for example ``"security_domains"``). :class:`DatasetCache`
keeps those datasets, and :func:`build_chart_spec` resolves the rows for a
chart in this order:

1. rows passed directly,
2. the dataset named by ``data_ref``,
3. the first cached dataset whose rows contain ``x_key`` and every y key.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from chartsmith.base import DEFAULT_COLORS, ChartSpec, ChartSpecError, ChartType, Row

logger = logging.getLogger(__name__)


class DatasetCache:
    """Ordered store of named row sets."""

    def __init__(self) -> None:
        self._datasets: dict[str, list[Row]] = {}

    def put(self, name: str, rows: Sequence[Row]) -> None:
        self._datasets[name] = [dict(row) for row in rows]

    def get(self, name: str) -> list[Row] | None:
        return self._datasets.get(name)

    def items(self) -> Iterator[tuple[str, list[Row]]]:
        return iter(self._datasets.items())

    def clear(self) -> None:
        self._datasets.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._datasets

    def __len__(self) -> int:
        return len(self._datasets)

    def find_matching(self, x_key: str, y_keys: Sequence[str]) -> tuple[str, list[Row]] | None:
        """First non-empty dataset whose first row has every requested field."""
        for name, rows in self._datasets.items():
            if not rows:
                continue
            first = rows[0]
            if x_key in first and all(key in first for key in y_keys):
                return name, rows
        return None


def _parse_chart_type(chart_type: ChartType | str) -> ChartType:
    try:
        return ChartType(chart_type)
    except ValueError:
        supported = ", ".join(t.value for t in ChartType)
        raise ChartSpecError(
            f"Unsupported chart type {chart_type!r}. Expected one of: {supported}"
        ) from None


def build_chart_spec(
    chart_type: ChartType | str,
    x_key: str,
    y_keys: Sequence[str],
    *,
    data: Sequence[Mapping[str, Any]] | None = None,
    data_ref: str | None = None,
    cache: DatasetCache | None = None,
    title: str | None = None,
    colors: Sequence[str] | None = None,
) -> ChartSpec:
    """Build a validated :class:`ChartSpec`, resolving its rows.

    Args:
        chart_type: Chart type or its tag (``"BarChart"``).
        x_key: Field used for category labels or slice names.
        y_keys: Fields plotted as series.
        data: Rows to plot directly.
        data_ref: Name of a cached dataset to plot.
        cache: Datasets available for ``data_ref`` and auto-detection.
        title: Chart heading.
        colors: Color tokens. Defaults to one palette color per series
            (the whole palette for pie charts).

    Returns:
        The chart spec.

    Raises:
        ChartSpecError: If the chart type is unknown, no y keys are given,
            or no rows can be found.
    """
    resolved_type = _parse_chart_type(chart_type)
    if not y_keys:
        raise ChartSpecError("At least one y key is required")

    rows = list(data) if data else []

    if not rows and data_ref and cache is not None:
        cached = cache.get(data_ref)
        if cached:
            logger.debug(f"Using cached dataset '{data_ref}' for chart")
            rows = cached

    if not rows and cache is not None and len(cache) > 0:
        match = cache.find_matching(x_key, y_keys)
        if match is not None:
            logger.debug(f"Auto-detected cached dataset '{match[0]}' for chart")
            rows = match[1]

    if not rows:
        raise ChartSpecError(
            "No data for chart. Pass rows directly or set data_ref to a cached "
            "dataset, and make sure x_key and y_keys match its field names."
        )

    # Pie slices are colored per row, so they keep the full palette
    if colors is None and resolved_type is not ChartType.PIE:
        colors = DEFAULT_COLORS[: len(y_keys)]

    return ChartSpec(
        chart_type=resolved_type,
        data=tuple(rows),
        x_key=x_key,
        y_keys=tuple(y_keys),
        title=title,
        colors=tuple(colors) if colors is not None else None,
    )
