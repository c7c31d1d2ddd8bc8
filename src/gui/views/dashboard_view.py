"""Dashboard window.

Thin Qt shell around ``DashboardViewModel``: rider cards, a grid of metric
cards (chart slot + legend + note), an error banner, header and footer. All
text comes from the view model; chart instances are created and destroyed
exclusively through the ``ChartLifecycleManager``, lazily once a metric card
is at least partly on screen.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Set
import logging

from PyQt6.QtCore import QEvent, Qt, QTimer
from PyQt6.QtWidgets import (
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from config import settings
from gui.charting.backends import BarChartInstance
from gui.charting.lifecycle import ChartLifecycleManager
from gui.charting.registry import ChartRegistry, create_chart_registry
from gui.charting.types import ChartConfig
from gui.services.event_bus import Event, EventBus, GUIEvent
from gui.services.load_orchestrator import LoadState
from gui.services.load_runner import LoadRunner
from gui.viewmodels.dashboard_viewmodel import DashboardViewModel, MetricCard, RiderCard

log = logging.getLogger(__name__)

STYLE_SHEET = """
QWidget#dashboardContent { background: #f5f6fa; }
QLabel#headerTitle { font-size: 30px; font-weight: 800; color: #2d2d44; }
QLabel#headerSubtitle { font-size: 15px; color: #6a6a80; }
QLabel#errorBanner { background: #fdecea; color: #b3261e; padding: 12px; border-radius: 8px; }
QFrame[card="true"] { background: white; border-radius: 14px; border: 2px solid transparent; }
QFrame[card="true"][active="true"] { border: 2px solid #667eea; }
QWidget#chartContainer[loading="true"] { background: #eef0f6; }
QLabel.nickname { font-style: italic; color: #6a6a80; }
QLabel#note { color: #8a8aa0; font-size: 11px; }
"""


def _refresh_style(widget: QWidget) -> None:
    widget.style().unpolish(widget)
    widget.style().polish(widget)


class RiderCardWidget(QFrame):
    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setProperty("card", True)
        self._name = QLabel()
        self._name.setStyleSheet("font-size: 20px; font-weight: 700;")
        self._nickname = QLabel()
        self._nickname.setProperty("class", "nickname")
        self._era = QLabel()
        lay = QVBoxLayout(self)
        for w in (self._name, self._nickname, self._era):
            w.setAlignment(Qt.AlignmentFlag.AlignCenter)
            lay.addWidget(w)

    def apply(self, card: RiderCard) -> None:
        self._name.setText(card.title)
        self._nickname.setText(card.nickname)
        self._era.setText(card.era)

    def mousePressEvent(self, event):  # noqa: N802
        self.setProperty("active", True)
        _refresh_style(self)
        super().mousePressEvent(event)


class MetricCardWidget(QFrame):
    def __init__(self, card: MetricCard, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.metric_id = card.metric_id
        self.setProperty("card", True)
        self._title = QLabel(card.title)
        self._title.setStyleSheet("font-size: 17px; font-weight: 700;")
        self.chart_container = QWidget()
        self.chart_container.setObjectName("chartContainer")
        self.chart_container.setMinimumHeight(260)
        self._chart_layout = QVBoxLayout(self.chart_container)
        self._chart_layout.setContentsMargins(0, 0, 0, 0)
        self._legend_layout = QVBoxLayout()
        self._note = QLabel()
        self._note.setObjectName("note")
        self._note.setWordWrap(True)
        lay = QVBoxLayout(self)
        lay.addWidget(self._title)
        lay.addWidget(self.chart_container)
        lay.addLayout(self._legend_layout)
        lay.addWidget(self._note)
        self.set_loading(True)
        self.apply(card)

    def apply(self, card: MetricCard) -> None:
        self._title.setText(card.title)
        while self._legend_layout.count():
            item = self._legend_layout.takeAt(0)
            if item.layout() is not None:
                while item.layout().count():
                    child = item.layout().takeAt(0).widget()
                    if child is not None:
                        child.deleteLater()
        for entry in card.legend:
            row = QHBoxLayout()
            swatch = QFrame()
            swatch.setFixedSize(14, 14)
            if entry.swatch:
                swatch.setStyleSheet(f"background: {entry.swatch}; border-radius: 3px;")
            row.addWidget(swatch)
            row.addWidget(QLabel(entry.text))
            row.addStretch(1)
            self._legend_layout.addLayout(row)
        self._note.setText(card.note or "")
        self._note.setVisible(bool(card.note))

    def set_loading(self, loading: bool) -> None:
        self.chart_container.setProperty("loading", loading)
        _refresh_style(self.chart_container)

    def mount(self, canvas: QWidget) -> None:
        self._chart_layout.addWidget(canvas)

    def unmount(self, canvas: QWidget) -> None:
        self._chart_layout.removeWidget(canvas)
        canvas.setParent(None)
        canvas.deleteLater()

    def visible_fraction(self, viewport: QWidget) -> float:
        if self.height() <= 0 or not self.isVisible():
            return 0.0
        top_left = self.mapTo(viewport, self.rect().topLeft())
        top = max(top_left.y(), 0)
        bottom = min(top_left.y() + self.height(), viewport.height())
        return max(bottom - top, 0) / self.height()

    def mousePressEvent(self, event):  # noqa: N802
        self.setProperty("active", True)
        _refresh_style(self)
        super().mousePressEvent(event)


class MountedChart:
    """Chart instance plus the card slot it is mounted into."""

    def __init__(self, instance: BarChartInstance, card: MetricCardWidget) -> None:
        self.instance = instance
        self._card = card
        card.mount(instance.canvas)

    @property
    def disposed(self) -> bool:
        return self.instance.disposed

    def dispose(self) -> None:
        if self.instance.disposed:
            return
        self.instance.dispose()
        self._card.unmount(self.instance.canvas)


class DashboardWindow(QMainWindow):
    def __init__(
        self,
        view_model: DashboardViewModel,
        runner: LoadRunner,
        *,
        registry: ChartRegistry | None = None,
        event_bus: EventBus | None = None,
        source: str = settings.DATA_URL,
    ) -> None:
        super().__init__()
        self._vm = view_model
        self._runner = runner
        self._bus = event_bus or EventBus()
        self._source = source
        self._registry = registry or create_chart_registry()
        self.charts = ChartLifecycleManager(self._create_chart, event_bus=self._bus)
        self._bus.subscribe(GUIEvent.CARD_VISIBLE, self._on_card_visible)
        self._bus.subscribe(GUIEvent.CHART_CREATED, self._on_chart_created)
        self._metric_cards: Dict[str, MetricCardWidget] = {}
        self._seen: Set[str] = set()
        self._rider_cards: List[RiderCardWidget] = []
        self._build_ui()
        self._vm.on_change(self._on_state)
        self._render()

    # Construction ------------------------------------------------------
    def _build_ui(self) -> None:
        self.setStyleSheet(STYLE_SHEET)
        self._scroll = QScrollArea()
        self._scroll.setWidgetResizable(True)
        content = QWidget()
        content.setObjectName("dashboardContent")
        content.installEventFilter(self)
        self._content = content
        lay = QVBoxLayout(content)
        self._title = QLabel()
        self._title.setObjectName("headerTitle")
        self._subtitle = QLabel(settings.WINDOW_SUBTITLE)
        self._subtitle.setObjectName("headerSubtitle")
        for w in (self._title, self._subtitle):
            w.setAlignment(Qt.AlignmentFlag.AlignCenter)
            lay.addWidget(w)
        self._error = QLabel()
        self._error.setObjectName("errorBanner")
        self._error.setVisible(False)
        lay.addWidget(self._error)
        self._riders_row = QHBoxLayout()
        lay.addLayout(self._riders_row)
        self._grid = QGridLayout()
        lay.addLayout(self._grid)
        for line in settings.FOOTER_LINES:
            footer = QLabel(line)
            footer.setAlignment(Qt.AlignmentFlag.AlignCenter)
            lay.addWidget(footer)
        lay.addStretch(1)
        self._scroll.setWidget(content)
        self.setCentralWidget(self._scroll)
        self.resize(1100, 900)
        self._scroll.verticalScrollBar().valueChanged.connect(lambda _v: self._observe_visibility())

    # Loading -----------------------------------------------------------
    def reload(self) -> None:
        self._runner.start(self._source)

    def _on_state(self, state: LoadState) -> None:
        self._render()

    # Rendering ---------------------------------------------------------
    def _render(self) -> None:
        self.setWindowTitle(self._vm.header_title().strip("⚡ "))
        self._title.setText(self._vm.header_title())
        message = self._vm.error_message
        self._error.setText(message or "")
        self._error.setVisible(bool(message))
        self._render_riders()
        # Tear down or refresh charts before their cards change
        for surface_id in self.charts.surfaces():
            self.charts.sync(surface_id, self._vm.chart_config(surface_id))
        self._render_metric_cards()
        QTimer.singleShot(0, self._observe_visibility)

    def _render_riders(self) -> None:
        cards = self._vm.rider_cards()
        while len(self._rider_cards) < len(cards):
            widget = RiderCardWidget()
            self._riders_row.addWidget(widget)
            self._rider_cards.append(widget)
        while len(self._rider_cards) > len(cards):
            widget = self._rider_cards.pop()
            self._riders_row.removeWidget(widget)
            widget.deleteLater()
        for widget, card in zip(self._rider_cards, cards):
            widget.apply(card)

    def _render_metric_cards(self) -> None:
        cards = self._vm.metric_cards()
        if self._vm.metric_ids() != list(self._metric_cards):
            # new cards start in the loading look until their chart exists
            for metric_id, widget in list(self._metric_cards.items()):
                self.charts.sync(metric_id, None)
                self._grid.removeWidget(widget)
                widget.deleteLater()
            self._metric_cards.clear()
            self._seen.clear()
            for index, card in enumerate(cards):
                widget = MetricCardWidget(card)
                self._grid.addWidget(widget, index // 2, index % 2)
                self._metric_cards[card.metric_id] = widget
        else:
            for card in cards:
                self._metric_cards[card.metric_id].apply(card)

    # Lazy chart creation ---------------------------------------------------
    def _observe_visibility(self) -> None:
        viewport = self._scroll.viewport()
        fresh: List[str] = []
        for metric_id, widget in self._metric_cards.items():
            if metric_id in self._seen:
                continue
            if widget.visible_fraction(viewport) >= settings.LAZY_VISIBILITY_THRESHOLD:
                self._seen.add(metric_id)
                fresh.append(metric_id)
        for metric_id in fresh:
            self._bus.publish(GUIEvent.CARD_VISIBLE, metric_id)
        if fresh:
            log.debug(
                "%d charts live (%d created, %d disposed)",
                self.charts.live_count(),
                self.charts.created,
                self.charts.disposed,
            )

    def _on_card_visible(self, event: Event) -> None:
        metric_id = event.payload
        self.charts.sync(metric_id, self._vm.chart_config(metric_id))

    def _on_chart_created(self, event: Event) -> None:
        widget = self._metric_cards.get(event.payload)
        if widget is None:
            return
        QTimer.singleShot(
            settings.LOADING_INDICATOR_DELAY_MS,
            lambda sid=event.payload, w=widget: self._clear_loading(sid, w),
        )

    def _clear_loading(self, metric_id: str, widget: MetricCardWidget) -> None:
        # the card may have been replaced by a reload in the meantime
        if self._metric_cards.get(metric_id) is not widget:
            return
        if self.charts.instance(metric_id) is not None:
            widget.set_loading(False)

    def _create_chart(self, surface_id: str, config: ChartConfig) -> MountedChart:
        instance = self._registry.build_config(config)
        return MountedChart(instance, self._metric_cards[surface_id])

    # Qt events ---------------------------------------------------------------
    def resizeEvent(self, event):  # noqa: N802
        super().resizeEvent(event)
        self._observe_visibility()

    def eventFilter(self, obj, event):  # noqa: N802
        # cards get their geometry only after the grid is laid out
        if obj is self._content and event.type() == QEvent.Type.Resize:
            QTimer.singleShot(0, self._observe_visibility)
        return super().eventFilter(obj, event)

    def keyPressEvent(self, event):  # noqa: N802
        if event.key() == Qt.Key.Key_Escape:
            for widget in [*self._rider_cards, *self._metric_cards.values()]:
                if widget.property("active"):
                    widget.setProperty("active", False)
                    _refresh_style(widget)
            return
        super().keyPressEvent(event)

    def closeEvent(self, event):  # noqa: N802
        self._runner.shutdown()
        self.charts.dispose_all()
        self._vm.close()
        super().closeEvent(event)


__all__ = ["DashboardWindow", "MetricCardWidget", "MountedChart", "RiderCardWidget"]
