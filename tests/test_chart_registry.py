"""Tests for the chart registry and the comparison bar chart builder."""

from __future__ import annotations

from dataclasses import replace

import pytest
from matplotlib.backends.backend_agg import FigureCanvasAgg

from gui.charting import ChartRequest, create_chart_registry
from gui.charting.backends import BarChartInstance, MatplotlibChartBackend
from gui.charting.config_builder import build_config, gradient_specs
from gui.charting.palette import derive_palette
from tests.factories import two_rider_dataset


@pytest.fixture
def registry():
    return create_chart_registry(MatplotlibChartBackend(canvas_factory=FigureCanvasAgg))


def _config():
    ds = two_rider_dataset()
    palette = derive_palette(ds)
    return build_config(ds.metric("grandTours"), ds.subjects_in_order(), palette, gradient_specs(palette))


def test_register_duplicate_chart_type(registry):
    def _dummy(req, backend):  # pragma: no cover - simple stub
        return None

    registry.register("custom.unique", _dummy, "Unique")
    with pytest.raises(ValueError):
        registry.register("custom.unique", _dummy, "Duplicate")


def test_build_from_config(registry):
    chart = registry.build_config(_config(), animate=False)
    assert isinstance(chart, BarChartInstance)
    assert [bar.get_height() for bar in chart.bars] == [5, 5]


def test_unknown_chart_type(registry):
    with pytest.raises(KeyError):
        registry.build(ChartRequest(chart_type="unknown.type", data={}))


def test_comparison_input_validation(registry):
    with pytest.raises(TypeError):
        registry.build(ChartRequest(chart_type="bar.comparison", data={"labels": ["A"]}))
    empty = replace(_config(), labels=())
    with pytest.raises(ValueError):
        registry.build(ChartRequest(chart_type="bar.comparison", data=empty))
