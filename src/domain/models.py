"""Domain models for the rider comparison dataset."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple


class DatasetParseError(ValueError):
    """Raised when a response body is not a valid rider dataset."""


@dataclass(frozen=True, slots=True)
class Subject:
    id: str
    name: str
    nickname: Optional[str] = None
    country: Optional[str] = None
    active_range: Optional[str] = None
    color_primary: Optional[str] = None
    color_secondary: Optional[str] = None
    color_light: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Metric:
    id: str
    title: str
    values: Mapping[str, float]
    max_value: float
    step_size: float = 1
    note: Optional[str] = None

    def value_for(self, subject_id: str) -> float:
        return self.values[subject_id]


@dataclass(frozen=True, slots=True)
class Dataset:
    """Subjects (in declared order) and the ordered metrics comparing them."""

    subjects: Mapping[str, Subject]
    metrics: Tuple[Metric, ...] = field(default_factory=tuple)

    def subjects_in_order(self) -> Tuple[Subject, ...]:
        return tuple(self.subjects.values())

    def metric(self, metric_id: str) -> Metric:
        for metric in self.metrics:
            if metric.id == metric_id:
                return metric
        raise KeyError(metric_id)


def _number(raw: Any, what: str) -> float:
    # bool is an int subclass but never a valid measurement
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise DatasetParseError(f"{what} must be a number, got {raw!r}")
    return raw


def _optional_str(raw: Any) -> Optional[str]:
    return None if raw is None else str(raw)


def _parse_subject(subject_id: str, raw: Any) -> Subject:
    if not isinstance(raw, dict):
        raise DatasetParseError(f"rider '{subject_id}' must be an object")
    name = raw.get("name")
    if not isinstance(name, str) or not name:
        raise DatasetParseError(f"rider '{subject_id}' is missing a name")
    return Subject(
        id=subject_id,
        name=name,
        nickname=_optional_str(raw.get("nickname")),
        country=_optional_str(raw.get("country")),
        active_range=_optional_str(raw.get("active")),
        color_primary=_optional_str(raw.get("colorPrimary")),
        color_secondary=_optional_str(raw.get("colorSecondary")),
        color_light=_optional_str(raw.get("colorLight")),
    )


def _parse_metric(raw: Any, subject_ids: Tuple[str, ...], index: int) -> Metric:
    if not isinstance(raw, dict):
        raise DatasetParseError(f"metric #{index} must be an object")
    metric_id = raw.get("id")
    title = raw.get("title")
    if not isinstance(metric_id, str) or not metric_id:
        raise DatasetParseError(f"metric #{index} is missing an id")
    if not isinstance(title, str):
        raise DatasetParseError(f"metric '{metric_id}' is missing a title")
    values = {}
    for sid in subject_ids:
        if sid not in raw:
            raise DatasetParseError(f"metric '{metric_id}' has no value for '{sid}'")
        values[sid] = _number(raw[sid], f"{metric_id}.{sid}")
    step = raw.get("stepSize", 1)
    return Metric(
        id=metric_id,
        title=title,
        values=MappingProxyType(values),
        max_value=_number(raw.get("maxValue"), f"{metric_id}.maxValue"),
        step_size=_number(step, f"{metric_id}.stepSize"),
        note=_optional_str(raw.get("note")) or None,
    )


def dataset_from_dict(payload: Any) -> Dataset:
    """Build a Dataset from the decoded ``{"riders": ..., "metrics": ...}`` document."""
    if not isinstance(payload, dict):
        raise DatasetParseError("dataset document must be an object")
    riders = payload.get("riders")
    metrics = payload.get("metrics")
    if not isinstance(riders, dict) or not riders:
        raise DatasetParseError("'riders' must be a non-empty object")
    if not isinstance(metrics, list):
        raise DatasetParseError("'metrics' must be a list")
    subjects = {sid: _parse_subject(sid, raw) for sid, raw in riders.items()}
    subject_ids = tuple(subjects)
    parsed = tuple(_parse_metric(raw, subject_ids, i) for i, raw in enumerate(metrics))
    return Dataset(subjects=MappingProxyType(subjects), metrics=parsed)


def parse_dataset(body: str) -> Dataset:
    try:
        payload = json.loads(body)
    except (TypeError, ValueError) as e:
        raise DatasetParseError(f"response body is not valid JSON: {e}") from e
    return dataset_from_dict(payload)


__all__ = [
    "Dataset",
    "DatasetParseError",
    "Metric",
    "Subject",
    "dataset_from_dict",
    "parse_dataset",
]
