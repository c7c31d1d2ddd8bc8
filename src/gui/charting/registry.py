"""Chart registry.

Maps logical chart types to builder callables so views request charts
without coupling to the concrete backend. The dashboard only needs
``bar.comparison`` today; further chart types register the same way.
"""

from __future__ import annotations

from dataclasses import dataclass
from time import perf_counter
from typing import Any, Callable, Dict
import logging

from .backends import MatplotlibChartBackend
from .types import ChartConfig, ChartRequest

log = logging.getLogger(__name__)

ChartBuilder = Callable[[ChartRequest, MatplotlibChartBackend], Any]


@dataclass
class ChartType:
    """Metadata for a registered chart type."""

    chart_type: str
    builder: ChartBuilder
    description: str


class ChartRegistry:
    def __init__(self, backend: MatplotlibChartBackend | None = None) -> None:
        self._types: Dict[str, ChartType] = {}
        self._backend = backend or MatplotlibChartBackend()

    def register(self, chart_type: str, builder: ChartBuilder, description: str) -> None:
        if chart_type in self._types:
            raise ValueError(f"Chart type already registered: {chart_type}")
        self._types[chart_type] = ChartType(chart_type, builder, description)

    def build(self, req: ChartRequest) -> Any:
        """Eagerly build the requested chart; the build duration is logged at debug."""
        ct = self._types.get(req.chart_type)
        if ct is None:
            raise KeyError(f"Unknown chart type: {req.chart_type}")
        start = perf_counter()
        instance = ct.builder(req, self._backend)
        log.debug("Built %s chart in %.1f ms", req.chart_type, (perf_counter() - start) * 1000.0)
        return instance

    def build_config(self, config: ChartConfig, **options: Any) -> Any:
        return self.build(ChartRequest(chart_type=config.chart_type, data=config, options=options or None))


def _comparison_bar_builder(req: ChartRequest, backend: MatplotlibChartBackend) -> Any:
    if not isinstance(req.data, ChartConfig):
        raise TypeError("bar.comparison expects a ChartConfig payload")
    if not req.data.labels:
        raise ValueError("No categories provided")
    animate = bool((req.options or {}).get("animate", True))
    return backend.create_bar_chart(req.data, animate=animate)


def create_chart_registry(backend: MatplotlibChartBackend | None = None) -> ChartRegistry:
    """Registry preloaded with the built-in chart types."""
    registry = ChartRegistry(backend)
    registry.register("bar.comparison", _comparison_bar_builder, "Paired rider comparison bar chart")
    return registry
