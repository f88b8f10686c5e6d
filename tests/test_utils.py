from datetime import date

import pytest

from debt_planner.errors import ValidationError
from debt_planner.utils import (
    add_months,
    on_day,
    parse_amount,
    parse_percent,
    parse_whole_number,
    parse_year_month,
    percent_of,
    safe_ratio,
)


def test_parse_year_month():
    assert parse_year_month("2025-03") == date(2025, 3, 1)
    assert parse_year_month("2025-03-17") == date(2025, 3, 1)
    with pytest.raises(ValidationError):
        parse_year_month("March 2025")
    with pytest.raises(ValidationError):
        parse_year_month("2025-13")


def test_add_months_clamps_day():
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2023, 11, 15), 3) == date(2024, 2, 15)


def test_on_day_clamps_to_month_length():
    assert on_day(date(2023, 2, 1), 31) == date(2023, 2, 28)
    assert on_day(date(2023, 4, 1), 15) == date(2023, 4, 15)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("500000", 500000.0),
        ("500k", 500000.0),
        ("1.5m", 1500000.0),
        ("$1,250.50", 1250.5),
        (" 75_000 ", 75000.0),
        (42, 42.0),
    ],
)
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == expected


@pytest.mark.parametrize("raw", ["", "ten", "nan", "inf", None, True])
def test_parse_amount_rejects_garbage(raw):
    with pytest.raises(ValidationError):
        parse_amount(raw, "amount")


def test_parse_percent_and_whole_numbers():
    assert parse_percent("8.5%") == 8.5
    assert parse_whole_number("12") == 12
    assert parse_whole_number("12.0") == 12
    with pytest.raises(ValidationError):
        parse_whole_number("12.5")


def test_ratios_guard_zero_denominator():
    assert safe_ratio(5, 0) == 0.0
    assert safe_ratio(5, 2) == 2.5
    assert percent_of(25, 200) == 12.5
    assert percent_of(25, 0) == 0.0
