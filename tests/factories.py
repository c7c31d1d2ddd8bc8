from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from config import settings
from domain.models import Dataset, parse_dataset


def packaged_body() -> str:
    return Path(settings.PACKAGE_DATA_FILE).read_text(encoding="utf-8")


def rider(
    name: str,
    primary: Optional[str] = "#ff0000",
    secondary: Optional[str] = "#880000",
    light: Optional[str] = "#ffaaaa",
) -> Dict[str, Any]:
    raw: Dict[str, Any] = {"name": name}
    if primary is not None:
        raw["colorPrimary"] = primary
    if secondary is not None:
        raw["colorSecondary"] = secondary
    if light is not None:
        raw["colorLight"] = light
    return raw


def two_rider_body(
    a: float = 5,
    b: float = 5,
    *,
    title: str = "Grand Tour Wins",
    max_value: float = 6,
    rider_a: Optional[Dict[str, Any]] = None,
    rider_b: Optional[Dict[str, Any]] = None,
) -> str:
    """The minimal A-vs-B document: one metric, two riders."""
    riders = {
        "a": rider_a or rider("A"),
        "b": rider_b or rider("B", "#0000ff", "#000088", "#aaaaff"),
    }
    return json.dumps(
        {
            "riders": riders,
            "metrics": [
                {"id": "grandTours", "title": title, "a": a, "b": b, "maxValue": max_value, "stepSize": 1}
            ],
        }
    )


def two_rider_dataset(**kwargs: Any) -> Dataset:
    return parse_dataset(two_rider_body(**kwargs))
