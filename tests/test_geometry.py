"""
tests/test_geometry.py

Number grammars and path data.
"""

from __future__ import annotations

import pytest

from geometry import is_percentage, normalize_unit, parse_float, parse_number_list, parse_points
from path_data import parse_path_data


# ─────────────────────────────────────────────────────────
# Numbers and lists
# ─────────────────────────────────────────────────────────

@pytest.mark.parametrize("value, expected", [
    ("12", 12.0),
    ("  -3.5px", -3.5),
    ("1e2", 100.0),
    (".5", 0.5),
    ("50%", 50.0),
    ("abc", None),
    ("", None),
    (None, None),
])
def test_parse_float(value, expected):
    assert parse_float(value) == expected


def test_parse_float_default():
    assert parse_float("auto", 7.0) == 7.0


def test_is_percentage():
    assert is_percentage("10%")
    assert not is_percentage("10")
    assert not is_percentage("none")


def test_normalize_unit():
    assert normalize_unit("1in") == 96.0
    assert normalize_unit("72pt") == pytest.approx(96.0)
    assert normalize_unit("bogus") == 0.0
    assert normalize_unit("bogus", None) is None


def test_number_list_delimiters():
    assert parse_number_list(" 1, 2\t3\n4,,5 ") == [1.0, 2.0, 3.0, 4.0, 5.0]


def test_number_list_sign_separates():
    assert parse_number_list("10-5 .5.5") == [10.0, -5.0, 0.5, 0.5]


def test_points_drop_odd_value():
    assert parse_points("0,0 10,10 20") == [(0.0, 0.0), (10.0, 10.0)]
    assert parse_points("") == []


# ─────────────────────────────────────────────────────────
# Path data
# ─────────────────────────────────────────────────────────

def test_path_lines_and_close():
    assert parse_path_data("M10 10 h 5 v 5 z") == [
        ("M", 10.0, 10.0),
        ("L", 15.0, 10.0),
        ("L", 15.0, 15.0),
        ("Z",),
    ]


def test_path_implicit_lineto_after_moveto():
    assert parse_path_data("m1 1 2 2") == [("M", 1.0, 1.0), ("L", 3.0, 3.0)]


def test_path_relative_after_close():
    commands = parse_path_data("M5 5 L10 5 Z l1 0")
    assert commands[-1] == ("L", 6.0, 5.0)


def test_path_smooth_cubic_reflects_control():
    commands = parse_path_data("M0 0 C0 10 10 10 10 0 S20 -10 20 0")
    assert commands[2] == ("C", 10.0, -10.0, 20.0, -10.0, 20.0, 0.0)


def test_path_smooth_quadratic():
    commands = parse_path_data("M0 0 Q5 5 10 0 T20 0")
    assert commands[2] == ("Q", 15.0, -5.0, 20.0, 0.0)


def test_path_arc():
    commands = parse_path_data("M0 0 a5 5 0 1 0 10 0")
    assert commands[1] == ("A", 5.0, 5.0, 0.0, True, False, 10.0, 0.0)


def test_path_arc_flags_any_nonzero():
    commands = parse_path_data("M0 0 A1 1 0 1e400 0 5 5")
    assert commands[1] == ("A", 1.0, 1.0, 0.0, True, False, 5.0, 5.0)


def test_path_compact_numbers():
    assert parse_path_data("M1-2L3.5.5") == [("M", 1.0, -2.0), ("L", 3.5, 0.5)]


def test_path_stops_at_garbage():
    assert parse_path_data("M0 0 L1 1 X 5 5") == [("M", 0.0, 0.0), ("L", 1.0, 1.0)]


def test_empty_path():
    assert parse_path_data("") == []
