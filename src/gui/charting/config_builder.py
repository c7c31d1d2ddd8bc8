"""Chart configuration builder for metric comparison charts.

``build_config`` is a pure function of (metric, riders in order, palette,
gradient specs). The returned ChartConfig carries everything the backend
needs: category labels, one bar series, axis bounds, the staggered reveal
animation policy and the tooltip format.
"""

from __future__ import annotations

from typing import Mapping, Optional, Sequence

from domain.models import Metric, Subject

from .gradients import GradientSpec, gradient_spec
from .palette import PaletteEntry
from .types import (
    AnimationPolicy,
    BarSeries,
    ChartConfig,
    ValueAxis,
)

__all__ = [
    "build_config",
    "ease_in_out_quart",
    "gradient_specs",
    "reveal_fraction",
]

DEFAULT_ANIMATION = AnimationPolicy()


def gradient_specs(palette: Mapping[str, PaletteEntry]) -> dict[str, Optional[GradientSpec]]:
    """Primary -> light gradient per rider (None where a color is missing)."""
    return {sid: gradient_spec(entry.primary, entry.light) for sid, entry in palette.items()}


def build_config(
    metric: Metric,
    subjects: Sequence[Subject],
    palette: Mapping[str, PaletteEntry],
    gradients: Mapping[str, Optional[GradientSpec]],
    *,
    animation: AnimationPolicy = DEFAULT_ANIMATION,
) -> ChartConfig:
    series = BarSeries(
        data=tuple(metric.value_for(s.id) for s in subjects),
        fills=tuple(gradients.get(s.id) for s in subjects),
        border_colors=tuple(
            palette[s.id].secondary if s.id in palette else None for s in subjects
        ),
    )
    return ChartConfig(
        chart_id=metric.id,
        title=metric.title,
        labels=tuple(s.name for s in subjects),
        series=(series,),
        value_axis=ValueAxis(max=metric.max_value, step=metric.step_size),
        animation=animation,
    )


def ease_in_out_quart(t: float) -> float:
    if t < 0.5:
        return 8 * t**4
    return 1 - ((-2 * t + 2) ** 4) / 2


def reveal_fraction(elapsed_ms: float, delay_ms: float, duration_ms: float) -> float:
    """Eased 0..1 progress of one element's reveal at ``elapsed_ms``."""
    if duration_ms <= 0:
        return 1.0
    t = (elapsed_ms - delay_ms) / duration_ms
    if t <= 0:
        return 0.0
    if t >= 1:
        return 1.0
    return ease_in_out_quart(t)
