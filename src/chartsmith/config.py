"""Rasterization settings with environment overrides.

Settings are read from environment variables with a prefix:

    CHARTSMITH_RASTER_SCALE=3
    CHARTSMITH_RASTER_TIMEOUT=10
    CHARTSMITH_RASTER_BACKGROUND=white

Usage:
    >>> from chartsmith.config import RasterConfig
    >>> config = RasterConfig.from_env()
    >>> config.scale
    2.0
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping


DEFAULT_SCALE = 2.0


@dataclass(frozen=True)
class RasterConfig:
    """Settings for PNG encoding.

    Attributes:
        scale: Output pixels per SVG unit. 2.0 gives a 1000x540 image.
        timeout: Seconds allowed for one encode, None for no limit.
        background: Color painted behind the document, None keeps
            transparency outside the rounded background.
    """

    scale: float = DEFAULT_SCALE
    timeout: float | None = None
    background: str | None = None

    def __post_init__(self) -> None:
        if self.scale <= 0:
            raise ValueError(f"scale must be positive, got {self.scale}")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    @classmethod
    def from_env(
        cls,
        prefix: str = "CHARTSMITH",
        environ: Mapping[str, str] | None = None,
    ) -> "RasterConfig":
        """Build a config from ``{prefix}_RASTER_*`` environment variables.

        Args:
            prefix: Environment variable prefix.
            environ: Mapping to read instead of ``os.environ``.

        Returns:
            Config with defaults for every variable that is not set.
        """
        environ = os.environ if environ is None else environ
        overrides: dict[str, Any] = {}
        for f in fields(cls):
            key = f"{prefix}_RASTER_{f.name.upper()}"
            if key in environ:
                overrides[f.name] = _parse_value(f.name, environ[key])
        return replace(cls(), **overrides)


def _parse_value(name: str, value: str) -> Any:
    """Parse an environment string for field ``name``."""
    text = value.strip()
    is_null = text.lower() in ("null", "none", "")
    if name == "background":
        return None if is_null else text
    if name == "timeout" and is_null:
        return None
    try:
        return float(text)
    except ValueError:
        raise ValueError(f"Invalid value for raster {name}: {value!r}") from None
