"""Runtime settings read from the environment.

A ``.env`` file in the working directory is loaded first (existing
environment variables win), so a deployment can keep its settings next to
the app::

    DEBT_BUDGET_FRACTION=0.5
    DEBT_EXTRA_AMOUNTS=0,5000,10000,15000,20000
    DEBT_SCHEDULE_MONTHS=12
    LOG_LEVEL=INFO
    LOG_FILE=
    WEB_HOST=0.0.0.0
    WEB_PORT=8710
    WEB_DEBUG=false
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple

from dotenv import load_dotenv

from .engine import MAX_MONTHS
from .errors import ValidationError
from .payoff import DEFAULT_EXTRA_AMOUNTS
from .schedule import DEFAULT_SCHEDULE_MONTHS
from .utils import parse_amount, parse_whole_number

DEFAULT_BUDGET_FRACTION = 0.5


@dataclass(frozen=True)
class Settings:
    budget_fraction: float = DEFAULT_BUDGET_FRACTION
    extra_amounts: Tuple[float, ...] = DEFAULT_EXTRA_AMOUNTS
    schedule_months: int = DEFAULT_SCHEDULE_MONTHS
    log_level: str = "INFO"
    log_file: Optional[str] = None
    web_host: str = "0.0.0.0"
    web_port: int = 8710
    web_debug: bool = False


def _env_bool(name: str, default: bool = False) -> bool:
    raw = (os.getenv(name, "") or "").strip().lower()
    if not raw:
        return bool(default)
    return raw in {"1", "true", "t", "yes", "y", "on"}


def parse_amounts(values: Iterable[Any], field: str = "extraAmounts") -> Tuple[float, ...]:
    """Parse each of ``values`` as one amount, so "5,000" stays 5000."""
    amounts = []
    for i, value in enumerate(values):
        amount = parse_amount(value, f"{field}[{i}]")
        if amount < 0:
            raise ValidationError("Extra payment cannot be negative", f"{field}[{i}]")
        amounts.append(amount)
    return tuple(amounts)


def parse_amount_list(value: str, field: str = "extraAmounts") -> Tuple[float, ...]:
    """Parse ``"0, 5k, 10000"`` into ``(0.0, 5000.0, 10000.0)``.

    Commas and whitespace separate items here, so a single amount cannot use
    a thousands separator; pass a list to :func:`parse_amounts` for that.
    """
    items = [item for item in re.split(r"[,\s]+", (value or "").strip()) if item]
    try:
        return parse_amounts(items, field)
    except ValidationError as exc:
        raise ValidationError(exc.message, field)


def load_settings(dotenv: bool = True) -> Settings:
    if dotenv:
        load_dotenv()

    fraction = parse_amount(os.getenv("DEBT_BUDGET_FRACTION", str(DEFAULT_BUDGET_FRACTION)), "DEBT_BUDGET_FRACTION")
    if not 0 < fraction <= 1:
        raise ValidationError("Budget fraction must be in (0, 1]", "DEBT_BUDGET_FRACTION")

    raw_amounts = os.getenv("DEBT_EXTRA_AMOUNTS", "")
    extra_amounts = parse_amount_list(raw_amounts, "DEBT_EXTRA_AMOUNTS") if raw_amounts.strip() else DEFAULT_EXTRA_AMOUNTS

    schedule_months = parse_whole_number(
        os.getenv("DEBT_SCHEDULE_MONTHS", str(DEFAULT_SCHEDULE_MONTHS)), "DEBT_SCHEDULE_MONTHS"
    )
    if schedule_months < 0:
        raise ValidationError("Number of months cannot be negative", "DEBT_SCHEDULE_MONTHS")
    if schedule_months > MAX_MONTHS:
        raise ValidationError(f"Number of months cannot exceed {MAX_MONTHS}", "DEBT_SCHEDULE_MONTHS")

    web_port = parse_whole_number(os.getenv("WEB_PORT", "8710"), "WEB_PORT")

    return Settings(
        budget_fraction=fraction,
        extra_amounts=extra_amounts,
        schedule_months=schedule_months,
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_file=os.getenv("LOG_FILE") or None,
        web_host=os.getenv("WEB_HOST", "0.0.0.0"),
        web_port=web_port,
        web_debug=_env_bool("WEB_DEBUG"),
    )
