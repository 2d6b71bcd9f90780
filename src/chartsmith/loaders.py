"""Loading chart specs from JSON descriptions and tabular data."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import polars as pl

from chartsmith.base import ChartSpec, ChartSpecError, ChartType, Row


# camelCase wire names, as sent by browser clients, mapped to field names
_FIELD_ALIASES = {
    "chartType": "chart_type",
    "xKey": "x_key",
    "yKeys": "y_keys",
}


def spec_from_dict(payload: Mapping[str, Any]) -> ChartSpec:
    """Build a chart spec from a JSON-style mapping.

    Both camelCase (``chartType``, ``xKey``, ``yKeys``) and snake_case keys
    are accepted. The chart type tag itself is not validated here, so an
    unknown tag yields a spec that renders as an empty document.

    Raises:
        ChartSpecError: If a required field is missing or has the wrong shape.
    """
    if not isinstance(payload, Mapping):
        raise ChartSpecError(f"Chart description must be an object, got {type(payload).__name__}")

    fields = {_FIELD_ALIASES.get(key, key): value for key, value in payload.items()}

    for name in ("chart_type", "x_key", "y_keys"):
        if name not in fields:
            raise ChartSpecError(f"Chart description is missing '{name}'")

    y_keys = fields["y_keys"]
    if isinstance(y_keys, str) or not isinstance(y_keys, Sequence) or not y_keys:
        raise ChartSpecError("'y_keys' must be a non-empty list of field names")

    data = fields.get("data") or []
    if not isinstance(data, Sequence) or not all(isinstance(row, Mapping) for row in data):
        raise ChartSpecError("'data' must be a list of objects")

    colors = fields.get("colors")
    if colors is not None and (
        isinstance(colors, str)
        or not isinstance(colors, Sequence)
        or not all(isinstance(color, str) for color in colors)
    ):
        raise ChartSpecError("'colors' must be a list of color strings")

    title = fields.get("title")
    if title is not None and not isinstance(title, str):
        raise ChartSpecError(f"'title' must be a string, got {type(title).__name__}")

    return ChartSpec(
        chart_type=str(fields["chart_type"]),
        data=tuple(data),
        x_key=str(fields["x_key"]),
        y_keys=tuple(str(key) for key in y_keys),
        title=title or None,
        colors=tuple(colors) if colors is not None else None,
    )


def spec_to_dict(spec: ChartSpec) -> dict[str, Any]:
    """JSON-safe camelCase description of ``spec``."""
    chart_type = spec.chart_type.value if isinstance(spec.chart_type, ChartType) else spec.chart_type
    payload: dict[str, Any] = {
        "chartType": chart_type,
        "data": [dict(row) for row in spec.data],
        "xKey": spec.x_key,
        "yKeys": list(spec.y_keys),
    }
    if spec.title:
        payload["title"] = spec.title
    if spec.colors is not None:
        payload["colors"] = list(spec.colors)
    return payload


def load_spec(path: str | Path) -> ChartSpec:
    """Read a chart description from a JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ChartSpecError: If the file is not a valid chart description.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    try:
        payload = json.loads(file_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ChartSpecError(f"Invalid JSON in {path}: {e}") from e
    return spec_from_dict(payload)


def read_rows(path: str | Path) -> list[Row]:
    """Load chart rows from a CSV, JSON or Parquet file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file extension is not supported.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    suffix = file_path.suffix.lower()
    if suffix == ".csv":
        df = pl.read_csv(file_path)
    elif suffix == ".json":
        df = pl.read_json(file_path)
    elif suffix == ".parquet":
        df = pl.read_parquet(file_path)
    else:
        raise ValueError(
            f"Unsupported file type: {suffix}. Supported types: .csv, .json, .parquet"
        )
    return df.to_dicts()


def spec_from_frame(
    df: pl.DataFrame,
    chart_type: ChartType | str,
    x_key: str,
    y_keys: Sequence[str],
    *,
    title: str | None = None,
    colors: Sequence[str] | None = None,
) -> ChartSpec:
    """Build a chart spec whose rows are the rows of a Polars DataFrame.

    Only ``x_key`` and the ``y_keys`` columns are kept.

    Raises:
        ChartSpecError: If a requested column is missing.
    """
    wanted = [x_key, *y_keys]
    missing = [name for name in wanted if name not in df.columns]
    if missing:
        raise ChartSpecError(f"Columns not found in data: {', '.join(missing)}")

    rows = df.select(list(dict.fromkeys(wanted))).to_dicts()
    return ChartSpec(
        chart_type=chart_type,
        data=tuple(rows),
        x_key=x_key,
        y_keys=tuple(y_keys),
        title=title,
        colors=tuple(colors) if colors is not None else None,
    )
