"""Legend text helpers for metric cards."""

from __future__ import annotations

from typing import Tuple

# Ordered title-substring rules; the first match wins.
UNIT_RULES: Tuple[Tuple[str, str], ...] = (
    ("Stage", "stages"),
    ("Tour de France Wins", "wins"),
    ("Grand Tour", "wins"),
    ("Monument", "wins"),
    ("World", "wins"),
    ("Career", "wins*"),
)


def unit_label(title: str) -> str:
    for needle, unit in UNIT_RULES:
        if needle in title:
            return unit
    return ""


def format_value(value: float) -> str:
    """Render integral floats without a trailing ``.0``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def legend_line(subject_name: str, value: float, unit: str) -> str:
    return f"{subject_name}: {format_value(value)} {unit}"


__all__ = ["UNIT_RULES", "format_value", "legend_line", "unit_label"]
