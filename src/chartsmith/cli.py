"""Command-line interface for chartsmith."""

import asyncio
import dataclasses
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from chartsmith.base import ChartSpecError
from chartsmith.charts import generate_chart_svg, supported_chart_types
from chartsmith.config import RasterConfig
from chartsmith.loaders import load_spec, read_rows
from chartsmith.raster import chart_spec_to_png

app = typer.Typer(
    name="chartsmith",
    help="Headless SVG and PNG chart rendering",
    add_completion=False,
)


@app.command(name="render")
def render_cmd(
    spec_file: Annotated[Path, typer.Argument(help="Path to a JSON chart description")],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output file path (prints SVG to stdout if omitted)"),
    ] = None,
    format: Annotated[
        Optional[str],
        typer.Option("--format", "-f", help="Output format (svg, png). Inferred from --output"),
    ] = None,
    rows: Annotated[
        Optional[Path],
        typer.Option("--rows", "-r", help="CSV, JSON or Parquet file replacing the chart rows"),
    ] = None,
    scale: Annotated[
        Optional[float],
        typer.Option("--scale", help="PNG pixels per SVG unit"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Render a chart description to SVG or PNG."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if not spec_file.exists():
        typer.echo(f"Error: File not found: {spec_file}", err=True)
        raise typer.Exit(1)

    if format is None:
        format = "png" if output is not None and output.suffix.lower() == ".png" else "svg"
    format = format.lower()
    if format not in ("svg", "png"):
        typer.echo(f"Error: Unsupported format: {format}", err=True)
        raise typer.Exit(1)

    try:
        spec = load_spec(spec_file)
        if rows is not None:
            spec = dataclasses.replace(spec, data=tuple(read_rows(rows)))
    except (ChartSpecError, FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if format == "svg":
        svg = generate_chart_svg(spec)
        if not svg:
            typer.echo(f"Error: Unsupported chart type: {spec.chart_type}", err=True)
            raise typer.Exit(1)
        if output:
            output.write_text(svg, encoding="utf-8")
            typer.echo(f"Chart written to {output}")
        else:
            typer.echo(svg)
        return

    if output is None:
        typer.echo("Error: --output is required for PNG format", err=True)
        raise typer.Exit(1)

    try:
        config = RasterConfig.from_env()
        if scale is not None:
            config = dataclasses.replace(config, scale=scale)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    result = asyncio.run(chart_spec_to_png(spec, config))
    if not result.available:
        typer.echo(
            "Error: PNG output unavailable. Check that the chart has rows and a supported "
            "type, and that cairosvg is installed (pip install chartsmith[raster])",
            err=True,
        )
        raise typer.Exit(1)

    output.write_bytes(result.content)
    typer.echo(f"Chart written to {output} ({result.size_bytes:,} bytes)")


@app.command(name="types")
def types_cmd() -> None:
    """List supported chart types."""
    for chart_type in supported_chart_types():
        typer.echo(chart_type)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
