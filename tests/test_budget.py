import pytest

from src.utils.budget import DEFAULT_BUDGET, MAX_BUDGET, budget_tier, format_currency, parse_budget


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("5000", 5000.0),
        ("$12,500", 12500.0),
        ("2500 per month", 2500.0),
        ("1e3", 1000.0),
        (750, 750.0),
    ],
)
def test_parse_budget_reads_leading_number(raw, expected):
    assert parse_budget(raw) == expected


@pytest.mark.parametrize("raw", ["", None, "abc", "0", 0, "-300", float("nan"), float("inf"), True])
def test_parse_budget_defaults_when_unusable(raw):
    assert parse_budget(raw) == DEFAULT_BUDGET


def test_budget_tier_boundaries():
    assert budget_tier(1999.99) == "low"
    assert budget_tier(2000) == "medium"
    assert budget_tier(9999) == "medium"
    assert budget_tier(10000) == "high"


def test_format_currency():
    assert format_currency(12500) == "$12,500"
    assert format_currency(10.5) == "$10.50"
    assert format_currency("oops") == "$0"


@pytest.mark.parametrize("raw", ["1e308", "$99999999999999999", 1e300, 10 ** 400])
def test_parse_budget_caps_huge_values(raw):
    assert parse_budget(raw) == MAX_BUDGET
