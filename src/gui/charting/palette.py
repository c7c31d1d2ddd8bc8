"""Per-rider chart palette derivation.

Each rider carries three colors in the dataset: a primary fill color, a
secondary (border) color and a light tint used as the far end of the bar
gradient. The palette is derived purely from the Dataset so it is discarded
together with it; nothing here is cached at module level.

Missing color fields propagate as ``None`` so rendering can fall back to an
absent gradient instead of failing the whole dashboard.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from domain.models import Dataset

__all__ = ["PaletteEntry", "derive_palette"]


@dataclass(frozen=True)
class PaletteEntry:
    primary: Optional[str]
    secondary: Optional[str]
    light: Optional[str]


def derive_palette(dataset: Dataset) -> Mapping[str, PaletteEntry]:
    return MappingProxyType(
        {
            sid: PaletteEntry(
                primary=subject.color_primary,
                secondary=subject.color_secondary,
                light=subject.color_light,
            )
            for sid, subject in dataset.subjects.items()
        }
    )
