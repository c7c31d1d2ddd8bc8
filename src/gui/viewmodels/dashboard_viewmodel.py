"""Dashboard ViewModel

Bridges the LoadOrchestrator to the dashboard view. Everything the view shows
is derived here from the orchestrator's current state: rider cards, metric
cards with legend lines, the header title and one ChartConfig per metric.

Design:
 - Derived data only exists while the orchestrator is Ready; any other state
   yields placeholders and ``None`` chart configs (which tear charts down).
 - The palette is cached per Dataset instance and dropped with it.
 - No widget lookups: cards are plain dataclasses keyed by rider / metric id.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Mapping, Optional, Sequence, Tuple

from config import settings
from domain.models import Dataset, Metric
from gui.charting.config_builder import build_config, gradient_specs
from gui.charting.legend import legend_line, unit_label
from gui.charting.palette import PaletteEntry, derive_palette
from gui.charting.types import ChartConfig
from gui.services.load_orchestrator import LoadOrchestrator, LoadState

FALLBACK_RIDER_LABELS: Tuple[str, ...] = ("Merckx", "Pogačar")


@dataclass(frozen=True)
class RiderCard:
    key: str
    title: str
    nickname: str = ""
    era: str = ""


@dataclass(frozen=True)
class LegendItem:
    text: str
    swatch: Optional[str] = None


@dataclass(frozen=True)
class MetricCard:
    metric_id: str
    title: str
    legend: Tuple[LegendItem, ...]
    note: Optional[str] = None


class DashboardViewModel:
    def __init__(
        self,
        orchestrator: LoadOrchestrator,
        *,
        fallback_labels: Sequence[str] = FALLBACK_RIDER_LABELS,
    ) -> None:
        self._orchestrator = orchestrator
        self._fallback_labels = tuple(fallback_labels)
        self._palette_source: Dataset | None = None
        self._palette: Mapping[str, PaletteEntry] | None = None
        self._listeners: List[Callable[[LoadState], None]] = []
        self._unsubscribe = orchestrator.subscribe(self._on_state)

    # State -------------------------------------------------------------
    @property
    def state(self) -> LoadState:
        return self._orchestrator.state

    @property
    def dataset(self) -> Dataset | None:
        return self._orchestrator.dataset

    @property
    def is_loading(self) -> bool:
        return self.state.is_loading

    @property
    def error_message(self) -> str | None:
        return self.state.message if self.state.is_error else None

    def on_change(self, listener: Callable[[LoadState], None]) -> None:
        self._listeners.append(listener)

    def close(self) -> None:
        self._unsubscribe()
        self._listeners.clear()

    def _on_state(self, state: LoadState) -> None:
        if not state.is_ready:
            self._palette_source = None
            self._palette = None
        for listener in list(self._listeners):
            listener(state)

    # Derived data ------------------------------------------------------
    def palette(self) -> Mapping[str, PaletteEntry] | None:
        dataset = self.dataset
        if dataset is None:
            return None
        if dataset is not self._palette_source:
            self._palette = derive_palette(dataset)
            self._palette_source = dataset
        return self._palette

    def header_title(self) -> str:
        dataset = self.dataset
        names = (
            [s.name for s in dataset.subjects_in_order()]
            if dataset is not None
            else list(self._fallback_labels)
        )
        return f"⚡ {' vs '.join(names)} ⚡"

    def rider_cards(self) -> List[RiderCard]:
        dataset = self.dataset
        if dataset is None:
            return [
                RiderCard(
                    key=f"placeholder-{i}",
                    title=settings.LOADING_LABEL if self.is_loading else fallback,
                )
                for i, fallback in enumerate(self._fallback_labels)
            ]
        return [
            RiderCard(
                key=s.id,
                title=s.name,
                nickname=f'"{s.nickname}"' if s.nickname else "",
                era=f"{s.country or ''} | Active: {s.active_range or ''}",
            )
            for s in dataset.subjects_in_order()
        ]

    def metric_ids(self) -> List[str]:
        dataset = self.dataset
        return [m.id for m in dataset.metrics] if dataset is not None else []

    def metric_cards(self) -> List[MetricCard]:
        dataset = self.dataset
        if dataset is None:
            return []
        return [self._metric_card(dataset, metric) for metric in dataset.metrics]

    def legend_lines(self, metric: Metric) -> List[str]:
        dataset = self.dataset
        if dataset is None:
            return [settings.LOADING_LABEL for _ in self._fallback_labels]
        unit = unit_label(metric.title)
        return [legend_line(s.name, metric.value_for(s.id), unit) for s in dataset.subjects_in_order()]

    def _metric_card(self, dataset: Dataset, metric: Metric) -> MetricCard:
        palette = self.palette() or {}
        lines = self.legend_lines(metric)
        legend = tuple(
            LegendItem(text=line, swatch=palette[s.id].primary if s.id in palette else None)
            for s, line in zip(dataset.subjects_in_order(), lines)
        )
        return MetricCard(metric_id=metric.id, title=metric.title, legend=legend, note=metric.note)

    def chart_config(self, metric_id: str) -> ChartConfig | None:
        """Config for one metric chart, or None while the dataset is not ready."""
        dataset = self.dataset
        palette = self.palette()
        if dataset is None or palette is None:
            return None
        try:
            metric = dataset.metric(metric_id)
        except KeyError:
            return None
        return build_config(metric, dataset.subjects_in_order(), palette, gradient_specs(palette))


__all__ = [
    "DashboardViewModel",
    "LegendItem",
    "MetricCard",
    "RiderCard",
]
