"""PNG rasterization of rendered charts.

This module converts chart SVG documents into PNG bytes for embedding in
static documents (DOCX exports, emails). Rasterization is best-effort: every
failure, including a missing encoder backend, is reported as an unavailable
:class:`RasterResult` and never raised.

The encoder backend is CairoSVG. It is imported lazily on first use, once per
process, and the encode itself runs in the event loop's default executor.

Example:
    import asyncio
    from chartsmith import ChartSpec, chart_spec_to_png

    result = asyncio.run(chart_spec_to_png(spec))
    if result.available:
        Path("chart.png").write_bytes(result.content)
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Callable

from chartsmith.base import ChartSpec
from chartsmith.charts import generate_chart_svg
from chartsmith.config import RasterConfig

logger = logging.getLogger(__name__)


Encoder = Callable[[bytes, RasterConfig], bytes]

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


# =============================================================================
# Result Type
# =============================================================================


@dataclass(frozen=True)
class RasterResult:
    """Outcome of a rasterization attempt.

    Attributes:
        content: PNG bytes, or None when no image was produced.
        error: Diagnostic text for logs. Callers should only rely on
            ``available``; every failure cause is handled the same way.
    """

    content: bytes | None = None
    error: str | None = None

    @property
    def available(self) -> bool:
        return self.content is not None

    @property
    def size_bytes(self) -> int:
        return len(self.content) if self.content else 0

    @classmethod
    def unavailable(cls, error: str | None = None) -> "RasterResult":
        return cls(content=None, error=error)


# =============================================================================
# Encoder Backend
# =============================================================================


class EncoderBackend:
    """Process-wide, lazily imported CairoSVG encoder.

    The import happens at most once even when many rasterizations start
    concurrently. A failed import is remembered and reported as missing.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._loaded = False
        self._svg2png: Callable[..., bytes] | None = None

    @property
    def loaded(self) -> bool:
        return self._loaded

    def get(self) -> Encoder | None:
        """Return the encoder, or None if CairoSVG cannot be imported."""
        if not self._loaded:
            with self._lock:
                if not self._loaded:
                    self._svg2png = self._load()
                    self._loaded = True
        svg2png = self._svg2png
        if svg2png is None:
            return None

        def encode(document: bytes, config: RasterConfig) -> bytes:
            return svg2png(
                bytestring=document,
                scale=config.scale,
                background_color=config.background,
            )

        return encode

    def reset(self) -> None:
        """Forget the loaded backend so the next call imports again."""
        with self._lock:
            self._loaded = False
            self._svg2png = None

    def _load(self) -> Callable[..., bytes] | None:
        try:
            from cairosvg import svg2png
        except (ImportError, OSError) as e:
            # OSError: the package is installed but libcairo is not
            logger.debug(f"CairoSVG backend unavailable: {e}")
            return None
        logger.debug("CairoSVG backend loaded")
        return svg2png


default_backend = EncoderBackend()


def _encode(document: str, config: RasterConfig, encoder: Encoder | None) -> bytes | None:
    """Blocking part of rasterization, run inside the executor."""
    if encoder is None:
        encoder = default_backend.get()
        if encoder is None:
            return None
    return encoder(document.encode("utf-8"), config)


# =============================================================================
# Public API
# =============================================================================


async def chart_spec_to_png(
    spec: ChartSpec,
    config: RasterConfig | None = None,
    *,
    encoder: Encoder | None = None,
) -> RasterResult:
    """Render ``spec`` and rasterize it to PNG.

    Args:
        spec: Chart to render. Specs without rows are never encoded.
        config: Encoding settings, defaults to :class:`RasterConfig`.
        encoder: Encoder to use instead of the CairoSVG backend.

    Returns:
        A result holding PNG bytes, or an unavailable result if ``spec``
        has no data, its chart type is unsupported, or encoding fails.
    """
    if not spec.data:
        logger.debug("Skipping rasterization of chart without rows")
        return RasterResult.unavailable("no data")

    config = config or RasterConfig()
    try:
        document = generate_chart_svg(spec)
        if not document:
            return RasterResult.unavailable(f"unsupported chart type {spec.chart_type!r}")

        loop = asyncio.get_running_loop()
        pending = loop.run_in_executor(None, _encode, document, config, encoder)
        if config.timeout is not None:
            png = await asyncio.wait_for(pending, timeout=config.timeout)
        else:
            png = await pending
    except asyncio.TimeoutError:
        logger.warning(f"Chart rasterization timed out after {config.timeout}s")
        return RasterResult.unavailable("timeout")
    except Exception as e:
        logger.warning(f"Chart rasterization failed: {e}")
        return RasterResult.unavailable(str(e))

    if png is None:
        return RasterResult.unavailable("encoder backend unavailable")
    if not isinstance(png, bytes) or not png.startswith(PNG_SIGNATURE):
        logger.warning("Chart rasterization returned data that is not a PNG image")
        return RasterResult.unavailable("invalid encoder output")
    return RasterResult(content=png)


async def rasterize_all(
    specs: Iterable[ChartSpec],
    config: RasterConfig | None = None,
    *,
    encoder: Encoder | None = None,
) -> list[RasterResult]:
    """Rasterize several charts concurrently, keeping their order."""
    return list(
        await asyncio.gather(
            *(chart_spec_to_png(spec, config, encoder=encoder) for spec in specs)
        )
    )
