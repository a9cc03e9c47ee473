import math

import pytest

from abcalc.formatting import format_days, format_percentage, parse_number


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1000", 1000.0),
        (" 12.5 ", 12.5),
        ("20,000", 20000.0),
        (42, 42.0),
        ("", 0.0),
        ("   ", 0.0),
        (None, 0.0),
        ("abc", 0.0),
        ("nan", 0.0),
        ("inf", 0.0),
    ],
)
def test_parse_number(raw, expected):
    assert parse_number(raw) == expected


def test_format_percentage():
    assert format_percentage(0.1234) == "12.34%"
    assert format_percentage(0.3) == "30.00%"
    assert format_percentage(-0.05) == "-5.00%"
    assert format_percentage(0.0) == "0.00%"
    assert format_percentage(None) == "N/A"
    assert format_percentage(math.nan) == "N/A"
    assert format_percentage(math.inf) == "∞%"


def test_format_days():
    assert format_days(None) == "N/A"
    assert format_days(1) == "1 day"
    assert format_days(0) == "0 days"
    assert format_days(39.2) == "40 days"
    assert format_days(1500) == "1,500 days"
