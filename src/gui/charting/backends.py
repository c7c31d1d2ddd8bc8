"""Chart backend implementations.

Only a Matplotlib backend is provided. Figures are embedded through the QtAgg
canvas by default; tests and exports pass the plain Agg canvas instead so no
QApplication is required.
"""

from __future__ import annotations

from time import perf_counter
from typing import Any, Callable, List, Optional, Sequence

from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg
from matplotlib.figure import Figure
from matplotlib.ticker import MultipleLocator

from .config_builder import reveal_fraction
from .gradients import FillHandle, build_gradient
from .types import ChartConfig

__all__ = ["BarChartInstance", "MatplotlibChartBackend"]

CanvasFactory = Callable[[Figure], Any]

FRAME_INTERVAL_MS = 16


class BarChartInstance:
    """A live bar chart bound to one figure/canvas pair.

    The bars start at zero height and grow according to the config's
    animation policy; hovering anywhere over the plot shows the nearest bar's
    ``"{label}: {value}"`` tooltip.
    """

    def __init__(self, config: ChartConfig, figure: Figure, canvas: Any) -> None:
        self.config = config
        self.figure = figure
        self.canvas = canvas
        self.axes = figure.add_subplot(111)
        self.bars: List[Any] = []
        self.fills: List[Optional[FillHandle]] = []
        self._values: List[float] = []
        self._delays: List[int] = []
        self._disposed = False
        self._started_at: float | None = None
        self._timer: Any = None
        self._tooltip: Any = None
        self._hover_index: int | None = None
        self._draw()
        self._cid = canvas.mpl_connect("motion_notify_event", self._on_motion)
        self._resize_cid = canvas.mpl_connect("resize_event", self._on_resize)

    # Construction ----------------------------------------------------
    def _draw(self) -> None:
        cfg = self.config
        ax = self.axes
        count = len(cfg.labels)
        positions = list(range(count))
        ax.yaxis.set_major_locator(MultipleLocator(cfg.value_axis.step))
        ax.set_xticks(positions)
        ax.set_xticklabels(
            cfg.labels,
            fontsize=cfg.category_axis.tick_size,
            fontweight=cfg.category_axis.tick_weight,
            color=cfg.category_axis.tick_color,
        )
        ax.tick_params(axis="y", labelsize=cfg.value_axis.tick_size, colors=cfg.value_axis.tick_color)
        ax.grid(axis="y", color=cfg.value_axis.grid_color)
        ax.grid(axis="x", visible=cfg.category_axis.show_grid)
        ax.set_axisbelow(True)
        ax.set_xlim(-0.5, count - 0.5)
        ax.set_ylim(0 if cfg.value_axis.begin_at_zero else None, cfg.value_axis.max)
        for side in ("top", "right", "left"):
            ax.spines[side].set_visible(False)

        for series_index, series in enumerate(cfg.series):
            width = self._bar_width(series.bar_thickness, count)
            for element_index, value in enumerate(series.data):
                spec = series.fills[element_index]
                border = series.border_colors[element_index]
                (bar,) = ax.bar(
                    [positions[element_index]],
                    [0],
                    width=width,
                    facecolor="none",
                    edgecolor=border or "none",
                    linewidth=series.border_width,
                    zorder=2,
                )
                bar.set_joinstyle("round")
                fill = build_gradient(ax, spec.start, spec.end) if spec is not None else None
                if fill is not None:
                    fill.apply_to(bar, 0, cfg.value_axis.max)
                self.bars.append(bar)
                self.fills.append(fill)
                self._values.append(value)
                self._delays.append(cfg.animation.delay(element_index, series_index))

        # imshow autoscales; pin the axes back to the configured bounds
        ax.set_xlim(-0.5, count - 0.5)
        ax.set_ylim(0 if cfg.value_axis.begin_at_zero else None, cfg.value_axis.max)
        self._refresh_fills()

        self._tooltip = ax.annotate(
            "",
            xy=(0, 0),
            xytext=(0, 10),
            textcoords="offset points",
            ha="center",
            color="white",
            bbox={
                "boxstyle": f"round,pad={cfg.tooltip.padding / 24:.2f}",
                "fc": cfg.tooltip.background,
                "ec": "none",
            },
            zorder=5,
        )
        self._tooltip.set_visible(False)

    def _refresh_fills(self) -> None:
        for fill in self.fills:
            if fill is not None:
                fill.refresh()

    def _on_resize(self, event: Any = None) -> None:
        """Re-run the layout and repaint the gradients for the new canvas size."""
        if self._disposed:
            return
        engine = self.figure.get_layout_engine()
        if engine is not None:
            engine.execute(self.figure)
        self._refresh_fills()
        self.canvas.draw_idle()

    def _bar_width(self, thickness_px: int, count: int) -> float:
        axes_px = self.axes.get_window_extent().width or 1.0
        per_category = axes_px / max(count, 1)
        return min(0.9, thickness_px / per_category)

    # Animation -------------------------------------------------------
    def start_reveal(self) -> None:
        self._started_at = perf_counter()
        self._timer = self.canvas.new_timer(interval=FRAME_INTERVAL_MS)
        self._timer.add_callback(self._tick)
        self._timer.start()

    def _tick(self) -> None:
        if self._started_at is None or self._disposed:
            return
        done = self.advance((perf_counter() - self._started_at) * 1000.0)
        self.canvas.draw_idle()
        if done and self._timer is not None:
            self._timer.stop()

    def advance(self, elapsed_ms: float) -> bool:
        """Set bar heights for ``elapsed_ms`` into the reveal; True once every bar is complete."""
        duration = self.config.animation.duration_ms
        complete = True
        for bar, value, delay in zip(self.bars, self._values, self._delays):
            fraction = reveal_fraction(elapsed_ms, delay, duration)
            bar.set_height(value * fraction)
            complete = complete and fraction >= 1.0
        return complete

    def finish_reveal(self) -> None:
        self.advance(float("inf"))
        if self._timer is not None:
            self._timer.stop()

    # Tooltips --------------------------------------------------------
    def nearest_index(self, xdata: float) -> int:
        centers = [bar.get_x() + bar.get_width() / 2 for bar in self.bars]
        return min(range(len(centers)), key=lambda i: abs(centers[i] - xdata))

    def tooltip_text(self, index: int) -> str:
        labels = self.config.labels
        return self.config.tooltip.label(labels[index % len(labels)], self._values[index])

    @property
    def hover_index(self) -> int | None:
        return self._hover_index

    def show_tooltip(self, index: int) -> None:
        bar = self.bars[index]
        self._tooltip.xy = (bar.get_x() + bar.get_width() / 2, bar.get_height())
        self._tooltip.set_text(self.tooltip_text(index))
        self._tooltip.set_visible(True)
        self._hover_index = index

    def hide_tooltip(self) -> None:
        self._tooltip.set_visible(False)
        self._hover_index = None

    def _on_motion(self, event: Any) -> None:
        if self._disposed or not self.bars:
            return
        if event.inaxes is not self.axes or event.xdata is None:
            if self._hover_index is not None:
                self.hide_tooltip()
                self.canvas.draw_idle()
            return
        index = self.nearest_index(event.xdata)
        if index != self._hover_index:
            self.show_tooltip(index)
            self.canvas.draw_idle()

    # Lifecycle -------------------------------------------------------
    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        if self._timer is not None:
            self._timer.stop()
            self._timer = None
        self.canvas.mpl_disconnect(self._cid)
        self.canvas.mpl_disconnect(self._resize_cid)
        for fill in self.fills:
            if fill is not None:
                fill.remove()
        self.fills.clear()
        self.bars.clear()
        self.figure.clear()


class MatplotlibChartBackend:
    def __init__(
        self,
        *,
        canvas_factory: CanvasFactory | None = None,
        figsize: Sequence[float] = (4.8, 3.2),
    ) -> None:
        self._canvas_factory: CanvasFactory = canvas_factory or FigureCanvasQTAgg
        self._figsize = tuple(figsize)

    def create_bar_chart(self, config: ChartConfig, *, animate: bool = True) -> BarChartInstance:
        fig = Figure(figsize=self._figsize, tight_layout=True)
        canvas = self._canvas_factory(fig)
        instance = BarChartInstance(config, fig, canvas)
        if animate:
            instance.start_reveal()
        else:
            instance.finish_reveal()
        return instance
