"""Chartsmith - Headless SVG Chart Rendering for Static Documents."""

from chartsmith.base import (
    CHART_HEIGHT,
    CHART_WIDTH,
    DEFAULT_COLORS,
    ChartSpec,
    ChartSpecError,
    ChartType,
    escape_xml,
)
from chartsmith.scale import LinearScale, axis_max, grid_lines, x_position
from chartsmith.charts import (
    generate_chart_svg,
    render_bar_chart,
    render_line_chart,
    render_pie_chart,
    supported_chart_types,
)
from chartsmith.config import RasterConfig
from chartsmith.raster import RasterResult, chart_spec_to_png, rasterize_all
from chartsmith.builder import DatasetCache, build_chart_spec
from chartsmith.loaders import load_spec, read_rows, spec_from_dict, spec_from_frame, spec_to_dict

# Version: Single source of truth from pyproject.toml
try:
    from importlib.metadata import version, PackageNotFoundError

    __version__ = version("chartsmith")
except PackageNotFoundError:
    # Package not installed (development mode)
    __version__ = "0.0.0.dev"

__all__ = [
    # Types
    "ChartType",
    "ChartSpec",
    "ChartSpecError",
    "CHART_WIDTH",
    "CHART_HEIGHT",
    "DEFAULT_COLORS",
    "escape_xml",
    # Scale
    "LinearScale",
    "axis_max",
    "grid_lines",
    "x_position",
    # Renderers
    "generate_chart_svg",
    "render_line_chart",
    "render_bar_chart",
    "render_pie_chart",
    "supported_chart_types",
    # Rasterization
    "RasterConfig",
    "RasterResult",
    "chart_spec_to_png",
    "rasterize_all",
    # Spec building
    "DatasetCache",
    "build_chart_spec",
    "load_spec",
    "read_rows",
    "spec_from_dict",
    "spec_from_frame",
    "spec_to_dict",
]
