"""
Tests for the leading-name split heuristic.
"""

import pytest

from ghs_demangler import split
from ghs_demangler.splitter import find_split


@pytest.mark.parametrize(
    "symbol, expected",
    [
        # No markers at all.
        ("main", 4),
        ("", 0),
        ("foo__bar", 8),
        # Reserved names.
        ("__start", 7),
        ("__", 2),
        ("__ghs_foo", 9),
        ("__ct__3FooFv", 12),
        # Argument and template markers.
        ("foo__Fi", 3),
        ("max__tm__2_iFii_i", 3),
        ("a__tm__2_i__Fv", 1),
        ("__Fv__Fi", 0),
        # Namespace markers end two characters before the `Q`.
        ("__ct__Q2_3Foo3BarFv", 4),
        ("draw__Q2_3gfx6CanvasFRCQ2_3gfx5Pointi", 4),
        ("f__Q8_1a1b1c1d1e1f1g1h", 1),
        ("foo__Q3_1a1b1c__Fv", 3),
        # Namespaces too deep or too early to be preceded by `__`.
        ("foo__Q9_1a", 10),
        ("Q2_3Foo3Bar", 11),
        ("xQ2_3Foo", 8),
    ],
)
def test_find_split(symbol, expected):
    assert find_split(symbol) == expected


def test_split_prefixes_length():
    assert split("main") == "4main"
    assert split("foo__Fi") == "3foo__Fi"
    assert split("") == "0"


def test_split_is_deterministic():
    symbol = "draw__Q2_3gfx6CanvasFRCQ2_3gfx5Pointi"
    assert split(symbol) == split(symbol) == f"4{symbol}"
