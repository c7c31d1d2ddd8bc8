"""Dataset document parsing."""

from __future__ import annotations

import json

import pytest

from domain.models import DatasetParseError, dataset_from_dict, parse_dataset
from tests.factories import rider, two_rider_body


def test_packaged_dataset_parses_in_declared_order(dataset_body):
    ds = parse_dataset(dataset_body)
    assert [s.id for s in ds.subjects_in_order()] == ["merckx", "pogacar"]
    assert [m.id for m in ds.metrics] == [
        "tourWins",
        "grandTours",
        "tourStages",
        "monuments",
        "worlds",
        "career",
    ]
    merckx = ds.subjects["merckx"]
    assert merckx.nickname == "The Cannibal"
    assert merckx.active_range == "1965-1978"
    assert merckx.color_light == "#FFB3B3"


def test_metric_values_and_optional_note(dataset_body):
    ds = parse_dataset(dataset_body)
    career = ds.metric("career")
    assert career.value_for("merckx") == 525
    assert career.max_value == 600
    assert career.step_size == 100
    assert career.note and career.note.startswith("*")
    assert ds.metric("worlds").note is None


def test_unknown_metric_lookup_raises_key_error():
    ds = parse_dataset(two_rider_body())
    with pytest.raises(KeyError):
        ds.metric("nope")


def test_values_are_read_only():
    ds = parse_dataset(two_rider_body())
    with pytest.raises(TypeError):
        ds.metric("grandTours").values["a"] = 9  # type: ignore[index]


def test_step_size_defaults_to_one():
    doc = json.loads(two_rider_body())
    del doc["metrics"][0]["stepSize"]
    assert dataset_from_dict(doc).metrics[0].step_size == 1


def test_invalid_json_is_a_parse_error():
    with pytest.raises(DatasetParseError):
        parse_dataset("<html>oops</html>")


@pytest.mark.parametrize(
    "mutate",
    [
        lambda d: d.pop("riders"),
        lambda d: d.__setitem__("metrics", {}),
        lambda d: d["riders"].__setitem__("a", {"colorPrimary": "#fff"}),
        lambda d: d["metrics"][0].pop("b"),
        lambda d: d["metrics"][0].__setitem__("a", "five"),
        lambda d: d["metrics"][0].__setitem__("a", True),
        lambda d: d["metrics"][0].pop("maxValue"),
        lambda d: d["metrics"][0].pop("id"),
    ],
)
def test_malformed_documents_are_rejected(mutate):
    doc = json.loads(two_rider_body())
    mutate(doc)
    with pytest.raises(DatasetParseError):
        dataset_from_dict(doc)


def test_missing_colors_are_tolerated():
    ds = parse_dataset(two_rider_body(rider_a=rider("A", primary=None, light=None)))
    subject = ds.subjects["a"]
    assert subject.color_primary is None
    assert subject.color_secondary == "#880000"
