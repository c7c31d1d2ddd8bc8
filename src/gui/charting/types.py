"""Core charting types.

``ChartConfig`` is the declarative description of one metric chart. It is a
tree of frozen dataclasses so two configs built from the same inputs compare
equal, which is what the lifecycle manager relies on to skip rebuilds.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol, Tuple

from .gradients import GradientSpec
from .legend import format_value


@dataclass(frozen=True)
class BarSeries:
    """One data series; index i of every tuple belongs to category i."""

    data: Tuple[float, ...]
    fills: Tuple[Optional[GradientSpec], ...]
    border_colors: Tuple[Optional[str], ...]
    border_width: int = 3
    corner_radius: int = 8
    bar_thickness: int = 80


@dataclass(frozen=True)
class ValueAxis:
    max: float
    step: float
    begin_at_zero: bool = True
    tick_color: str = "#7a7a8e"
    tick_size: int = 12
    grid_color: Tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.05)


@dataclass(frozen=True)
class CategoryAxis:
    tick_color: str = "#4a4a5e"
    tick_size: int = 14
    tick_weight: int = 600
    show_grid: bool = False


@dataclass(frozen=True)
class AnimationPolicy:
    duration_ms: int = 2000
    easing: str = "easeInOutQuart"
    element_stagger_ms: int = 300
    series_stagger_ms: int = 100

    def delay(
        self,
        element_index: int,
        series_index: int,
        *,
        kind: str = "data",
        mode: str = "default",
    ) -> int:
        """Start delay for one element; only data reveal animations are staggered."""
        if kind != "data" or mode != "default":
            return 0
        return element_index * self.element_stagger_ms + series_index * self.series_stagger_ms


@dataclass(frozen=True)
class TooltipPolicy:
    background: Tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.8)
    padding: int = 12
    corner_radius: int = 8
    display_colors: bool = False
    title: str = ""

    def label(self, category: str, value: float) -> str:
        return f"{category}: {format_value(value)}"


@dataclass(frozen=True)
class InteractionPolicy:
    mode: str = "nearest"
    intersect: bool = False


@dataclass(frozen=True)
class ChartConfig:
    chart_id: str
    title: str
    labels: Tuple[str, ...]
    series: Tuple[BarSeries, ...]
    value_axis: ValueAxis
    category_axis: CategoryAxis = field(default_factory=CategoryAxis)
    animation: AnimationPolicy = field(default_factory=AnimationPolicy)
    tooltip: TooltipPolicy = field(default_factory=TooltipPolicy)
    interaction: InteractionPolicy = field(default_factory=InteractionPolicy)
    show_legend: bool = False
    chart_type: str = "bar.comparison"


@dataclass(frozen=True)
class ChartRequest:
    """Represents a logical chart request.

    Attributes:
        chart_type: Identifier registered in the chart registry (e.g. 'bar.comparison').
        data: Payload understood by the chart builder (a ChartConfig for bars).
        options: Optional backend hints (canvas factory, figure size).
    """

    chart_type: str
    data: Any
    options: Optional[Dict[str, Any]] = None


class ChartInstance(Protocol):  # pragma: no cover - structural only
    """Live chart handle owned by the lifecycle manager."""

    @property
    def disposed(self) -> bool: ...

    def dispose(self) -> None: ...
