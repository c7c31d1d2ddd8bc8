from __future__ import annotations

import pytest

from gui.charting.legend import format_value, legend_line, unit_label


@pytest.mark.parametrize(
    "title,unit",
    [
        ("Tour de France Stage Wins", "stages"),
        ("Tour de France Wins", "wins"),
        ("Grand Tour Wins", "wins"),
        ("Monument Wins", "wins"),
        ("World Championship Titles", "wins"),
        ("Career Victories", "wins*"),
        ("Podium Finishes", ""),
        ("", ""),
    ],
)
def test_unit_label_rules(title, unit):
    assert unit_label(title) == unit


def test_first_matching_rule_wins():
    # contains both "Stage" and "Grand Tour"
    assert unit_label("Grand Tour Stage Wins") == "stages"


def test_legend_line_format():
    assert legend_line("A", 5, "wins") == "A: 5 wins"
    assert legend_line("Eddy Merckx", 525, "wins*") == "Eddy Merckx: 525 wins*"


def test_legend_line_without_unit_keeps_separator():
    assert legend_line("A", 3, "") == "A: 3 "


def test_integral_floats_render_without_decimal():
    assert format_value(5.0) == "5"
    assert format_value(2.5) == "2.5"
    assert legend_line("B", 5.0, "wins") == "B: 5 wins"
