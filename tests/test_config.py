"""Tests for rasterization settings."""

import pytest

from chartsmith.config import DEFAULT_SCALE, RasterConfig


class TestRasterConfig:
    """Test config defaults and validation."""

    def test_defaults(self):
        config = RasterConfig()
        assert config.scale == DEFAULT_SCALE
        assert config.timeout is None
        assert config.background is None

    @pytest.mark.parametrize("kwargs", [{"scale": 0}, {"scale": -1}, {"timeout": 0}])
    def test_rejects_non_positive(self, kwargs):
        with pytest.raises(ValueError, match="must be positive"):
            RasterConfig(**kwargs)


class TestFromEnv:
    """Test environment overrides."""

    def test_empty_environment(self):
        assert RasterConfig.from_env(environ={}) == RasterConfig()

    def test_overrides(self):
        config = RasterConfig.from_env(environ={
            "CHARTSMITH_RASTER_SCALE": "3",
            "CHARTSMITH_RASTER_TIMEOUT": "2.5",
            "CHARTSMITH_RASTER_BACKGROUND": " white ",
        })
        assert config == RasterConfig(scale=3.0, timeout=2.5, background="white")

    def test_custom_prefix(self):
        config = RasterConfig.from_env(prefix="REPORTS", environ={"REPORTS_RASTER_SCALE": "1"})
        assert config.scale == 1.0

    def test_other_prefix_ignored(self):
        config = RasterConfig.from_env(environ={"REPORTS_RASTER_SCALE": "1"})
        assert config.scale == DEFAULT_SCALE

    @pytest.mark.parametrize("value", ["none", "NULL", ""])
    def test_null_like_timeout(self, value):
        config = RasterConfig.from_env(environ={"CHARTSMITH_RASTER_TIMEOUT": value})
        assert config.timeout is None

    def test_null_like_background(self):
        config = RasterConfig.from_env(environ={"CHARTSMITH_RASTER_BACKGROUND": "none"})
        assert config.background is None

    def test_invalid_number(self):
        with pytest.raises(ValueError, match="Invalid value for raster scale"):
            RasterConfig.from_env(environ={"CHARTSMITH_RASTER_SCALE": "big"})

    def test_null_scale_is_invalid(self):
        with pytest.raises(ValueError, match="scale"):
            RasterConfig.from_env(environ={"CHARTSMITH_RASTER_SCALE": "none"})

    def test_zero_scale_is_invalid(self):
        with pytest.raises(ValueError, match="must be positive"):
            RasterConfig.from_env(environ={"CHARTSMITH_RASTER_SCALE": "0"})

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("CHARTSMITH_RASTER_SCALE", "4")
        assert RasterConfig.from_env().scale == 4.0
