import pytest

from payoff_calc.utils import parse_number, parse_percent, years_to_months


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("10000", 10000.0),
        ("10,000.50", 10000.5),
        (" 250k ", 250000.0),
        ("1.2M", 1200000.0),
        ("", 0.0),
        ("   ", 0.0),
        (None, 0.0),
    ],
)
def test_parse_number(raw, expected):
    assert parse_number(raw) == pytest.approx(expected)


@pytest.mark.parametrize("raw", ["abc", "12x", "nan", "inf", "k"])
def test_parse_number_rejects_garbage(raw):
    with pytest.raises(ValueError, match="Invalid numeric value"):
        parse_number(raw)


def test_parse_percent_strips_sign():
    assert parse_percent("5.25%") == 5.25
    assert parse_percent("5") == 5.0
    assert parse_percent("") == 0.0


@pytest.mark.parametrize("years,months", [(5, 60), (30, 360), (2.5, 30), (0, 0)])
def test_years_to_months(years, months):
    assert years_to_months(years) == months
