"""Vertical bar gradients.

A gradient has two halves:

 - ``GradientSpec``: a declarative, surface-independent description (start and
   end color) that can live inside a frozen ChartConfig and be compared.
 - ``FillHandle``: the realised fill, built by ``build_gradient`` against a live
   drawing surface (a matplotlib Axes attached to a figure). Handles are never
   reused across surfaces; a recreated chart builds fresh ones.

The gradient runs from ``color_start`` at the top of the figure to
``color_end`` ``GRADIENT_SPAN`` display pixels further down, holding the end
color below that.

Columns depend on the figure geometry, so ``FillHandle.refresh`` has to run
after every resize or layout pass.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import numpy as np
from matplotlib.colors import LinearSegmentedColormap, to_rgba

__all__ = [
    "GRADIENT_SPAN",
    "FillHandle",
    "GradientSpec",
    "SurfaceReleasedError",
    "build_gradient",
    "gradient_spec",
]

GRADIENT_SPAN = 300  # display pixels


class SurfaceReleasedError(RuntimeError):
    """Raised when a gradient is requested for a surface that is no longer drawable."""


@dataclass(frozen=True)
class GradientSpec:
    start: Optional[str]
    end: Optional[str]
    span: int = GRADIENT_SPAN

    @property
    def is_complete(self) -> bool:
        return bool(self.start) and bool(self.end)


def gradient_spec(color_start: Optional[str], color_end: Optional[str]) -> Optional[GradientSpec]:
    """Return a spec, or None when either color is missing."""
    if not color_start or not color_end:
        return None
    return GradientSpec(color_start, color_end)


def _surface_is_live(surface: Any) -> bool:
    figure = getattr(surface, "figure", None)
    return figure is not None and surface in getattr(figure, "axes", ())


class FillHandle:
    """A gradient fill bound to one Axes."""

    def __init__(self, surface: Any, color_start: str, color_end: str, span: int) -> None:
        self._surface = surface
        self.span = span
        self.colormap = LinearSegmentedColormap.from_list(
            "bar_gradient", [to_rgba(color_start), to_rgba(color_end)]
        )
        self._images: list[tuple[Any, float, float]] = []

    @property
    def surface(self) -> Any:
        return self._surface

    def rgba_at(self, offset_px: float) -> tuple[float, float, float, float]:
        """Color at ``offset_px`` display pixels below the top of the figure."""
        t = min(max(offset_px / self.span, 0.0), 1.0)
        return tuple(float(c) for c in self.colormap(t))  # type: ignore[return-value]

    def column(self, y_low: float, y_high: float, rows: int = 64) -> np.ndarray:
        """Image column (rows x 1 x RGBA) covering data range [y_low, y_high], top row first."""
        ax = self._surface
        ys = np.linspace(y_high, y_low, rows)
        points = np.column_stack([np.zeros(rows), ys])
        display_y = ax.transData.transform(points)[:, 1]
        offsets = ax.figure.bbox.height - display_y
        t = np.clip(offsets / self.span, 0.0, 1.0)
        return self.colormap(t).reshape(rows, 1, 4)

    def apply_to(self, patch: Any, y_low: float, y_high: float) -> Any:
        """Paint the gradient inside ``patch`` (a bar Rectangle) and return the image artist."""
        if not _surface_is_live(self._surface):
            raise SurfaceReleasedError("drawing surface has been released")
        x0 = patch.get_x()
        x1 = x0 + patch.get_width()
        image = self._surface.imshow(
            self.column(y_low, y_high),
            extent=(x0, x1, y_low, y_high),
            aspect="auto",
            origin="upper",
            interpolation="bilinear",
            zorder=patch.get_zorder() - 0.1,
        )
        image.set_clip_path(patch)
        self._images.append((image, y_low, y_high))
        return image

    def refresh(self) -> None:
        """Recompute every painted column against the current figure geometry."""
        if not _surface_is_live(self._surface):
            return
        for image, y_low, y_high in self._images:
            image.set_data(self.column(y_low, y_high))

    def remove(self) -> None:
        for image, _low, _high in self._images:
            if image.axes is not None:
                image.remove()
        self._images.clear()


def build_gradient(surface: Any, color_start: Optional[str], color_end: Optional[str]) -> Optional[FillHandle]:
    """Build a fill for a live surface; returns None when a color is missing."""
    if not _surface_is_live(surface):
        raise SurfaceReleasedError("drawing surface has been released")
    if not color_start or not color_end:
        return None
    return FillHandle(surface, color_start, color_end, GRADIENT_SPAN)
