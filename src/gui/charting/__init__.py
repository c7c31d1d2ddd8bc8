"""Charting layer for the metric comparison cards.

Pure pieces (palette, legend, config builder, lifecycle manager) carry no Qt
dependency so they can be tested headless; the matplotlib backend renders a
ChartConfig into a figure/canvas pair and returns a disposable instance.
"""

from .config_builder import build_config, gradient_specs  # noqa: F401
from .legend import legend_line, unit_label  # noqa: F401
from .lifecycle import ChartLifecycleManager  # noqa: F401
from .palette import PaletteEntry, derive_palette  # noqa: F401
from .registry import ChartRegistry, create_chart_registry  # noqa: F401
from .types import ChartConfig, ChartRequest  # noqa: F401
