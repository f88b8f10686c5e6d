"""Utility functions for the debt planner.

This module provides helpers for parsing user input (amounts, percentages and
year-month strings) into Python values, for month arithmetic on dates and for
ratios that must not blow up on a zero denominator.
"""

from __future__ import annotations

import calendar
from datetime import date
from typing import Optional, Union

from .errors import ValidationError

Number = Union[int, float]


def parse_year_month(ym: str) -> date:
    """Parse a YYYY-MM string into a ``date`` object (first day of month).

    Parameters
    ----------
    ym: str
        A string in the form ``"YYYY-MM"``. The day component, if present,
        will be ignored.

    Raises
    ------
    ValidationError
        If the string is not a valid year-month.
    """
    try:
        parts = ym.split("-")
        if len(parts) < 2:
            raise ValueError
        return date(int(parts[0]), int(parts[1]), 1)
    except (AttributeError, ValueError) as exc:
        raise ValidationError(f"Invalid year-month string: {ym}") from exc


def add_months(dt: date, months: int) -> date:
    """Return a new date a number of months after ``dt``.

    The day of the month is clamped to the last valid day if needed (e.g.,
    adding one month to Jan 31 yields Feb 28 or 29).
    """
    year = dt.year + (dt.month - 1 + months) // 12
    month = (dt.month - 1 + months) % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def on_day(dt: date, day: int) -> date:
    """Move ``dt`` to ``day`` within the same month, clamped to the month length."""
    return dt.replace(day=min(day, calendar.monthrange(dt.year, dt.month)[1]))


def parse_amount(value: Union[str, Number], field: Optional[str] = None) -> float:
    """Parse a currency amount with optional suffixes.

    Accepts plain numbers ("500000", 500000), thousands separators and a
    leading currency sign ("$1,250.50", "₹75,000") and shorthand with
    ``k``/``m`` suffixes (e.g. "500k" meaning 500_000).
    """
    if isinstance(value, bool):
        raise ValidationError(f"Invalid amount: {value!r}", field)
    if isinstance(value, (int, float)):
        return float(value)
    if value is None:
        raise ValidationError("Value is required", field)
    text = str(value).strip().lower().replace(",", "").replace("_", "")
    text = text.lstrip("$€£₹").strip()
    factor = 1.0
    if text.endswith("k"):
        factor = 1_000.0
        text = text[:-1]
    elif text.endswith("m"):
        factor = 1_000_000.0
        text = text[:-1]
    try:
        number = float(text) * factor
    except ValueError:
        raise ValidationError(f"Invalid amount: {value!r}", field)
    if number != number or number in (float("inf"), float("-inf")):
        raise ValidationError(f"Invalid amount: {value!r}", field)
    return number


def parse_percent(value: Union[str, Number], field: Optional[str] = None) -> float:
    """Parse an annual percentage such as "10.5" or "10.5%" into 10.5."""
    if isinstance(value, str):
        value = value.strip()
        if value.endswith("%"):
            value = value[:-1]
    try:
        return parse_amount(value, field)
    except ValidationError:
        raise ValidationError(f"Invalid percentage: {value!r}", field)


def parse_whole_number(value: Union[str, Number], field: Optional[str] = None) -> int:
    """Parse a count such as a number of months or a day of the month."""
    number = parse_amount(value, field)
    if number != int(number):
        raise ValidationError(f"Expected a whole number, got {value!r}", field)
    return int(number)


def safe_ratio(numerator: float, denominator: float) -> float:
    """Return ``numerator / denominator``, or 0.0 when the denominator is zero."""
    if not denominator:
        return 0.0
    return numerator / denominator


def percent_of(part: float, whole: float) -> float:
    """Return ``part`` as a percentage of ``whole`` (0.0 when ``whole`` is zero)."""
    return safe_ratio(part, whole) * 100
