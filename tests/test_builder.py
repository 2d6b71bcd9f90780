"""Tests for chart spec building from cached datasets."""

import pytest

from chartsmith.base import DEFAULT_COLORS, ChartSpecError, ChartType
from chartsmith.builder import DatasetCache, build_chart_spec


@pytest.fixture
def cache() -> DatasetCache:
    """Cache holding two previously fetched datasets."""
    cache = DatasetCache()
    cache.put("overview_kpis", [{"metric": "apps", "value": 12}])
    cache.put(
        "security_domains",
        [
            {"domain": "Identity", "compliance": 82, "controls": 40},
            {"domain": "Network", "compliance": 67, "controls": 25},
        ],
    )
    return cache


class TestDatasetCache:
    """Test the dataset cache."""

    def test_put_and_get(self, cache):
        assert "security_domains" in cache
        assert len(cache) == 2
        assert cache.get("security_domains")[0]["domain"] == "Identity"
        assert cache.get("missing") is None

    def test_items_keep_insertion_order(self, cache):
        assert [name for name, _ in cache.items()] == ["overview_kpis", "security_domains"]

    def test_find_matching(self, cache):
        name, rows = cache.find_matching("domain", ["compliance", "controls"])
        assert name == "security_domains"
        assert len(rows) == 2

    def test_find_matching_skips_empty(self):
        cache = DatasetCache()
        cache.put("empty", [])
        cache.put("full", [{"x": 1, "y": 2}])
        assert cache.find_matching("x", ["y"])[0] == "full"

    def test_no_match(self, cache):
        assert cache.find_matching("domain", ["unknown"]) is None

    def test_clear(self, cache):
        cache.clear()
        assert len(cache) == 0


class TestBuildChartSpec:
    """Test spec building and row resolution."""

    def test_explicit_data_wins(self, cache):
        spec = build_chart_spec(
            "BarChart", "m", ["v"],
            data=[{"m": "a", "v": 1}],
            data_ref="security_domains",
            cache=cache,
        )
        assert spec.chart_type is ChartType.BAR
        assert spec.data == ({"m": "a", "v": 1},)

    def test_data_ref(self, cache):
        spec = build_chart_spec(
            ChartType.LINE, "metric", ["value"], data_ref="overview_kpis", cache=cache,
        )
        assert spec.data[0]["metric"] == "apps"

    def test_auto_detect(self, cache):
        spec = build_chart_spec(ChartType.BAR, "domain", ["compliance"], cache=cache)
        assert [row["domain"] for row in spec.data] == ["Identity", "Network"]

    def test_unknown_data_ref_falls_back_to_auto_detect(self, cache):
        spec = build_chart_spec(
            ChartType.BAR, "domain", ["controls"], data_ref="nope", cache=cache,
        )
        assert len(spec.data) == 2

    def test_no_data_raises(self, cache):
        with pytest.raises(ChartSpecError, match="No data for chart"):
            build_chart_spec(ChartType.BAR, "team", ["score"], cache=cache)

    def test_no_cache_no_data_raises(self):
        with pytest.raises(ChartSpecError):
            build_chart_spec(ChartType.BAR, "team", ["score"])

    def test_unknown_chart_type(self):
        with pytest.raises(ChartSpecError, match="Unsupported chart type"):
            build_chart_spec("Scatter", "x", ["y"], data=[{"x": 1, "y": 2}])

    def test_empty_y_keys(self):
        with pytest.raises(ChartSpecError, match="y key"):
            build_chart_spec(ChartType.BAR, "x", [], data=[{"x": 1}])

    def test_default_colors_one_per_series(self):
        spec = build_chart_spec(ChartType.LINE, "x", ["a", "b"], data=[{"x": 1, "a": 1, "b": 2}])
        assert spec.colors == DEFAULT_COLORS[:2]

    def test_pie_keeps_full_palette(self):
        spec = build_chart_spec(ChartType.PIE, "x", ["v"], data=[{"x": "a", "v": 1}])
        assert spec.colors is None
        assert spec.palette == DEFAULT_COLORS

    def test_explicit_colors_and_title(self):
        spec = build_chart_spec(
            ChartType.BAR, "x", ["v"],
            data=[{"x": "a", "v": 1}],
            colors=["#123456"],
            title="Coverage",
        )
        assert spec.colors == ("#123456",)
        assert spec.title == "Coverage"
