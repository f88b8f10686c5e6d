"""Assemble the full analysis of one portfolio.

``build_report`` runs the three strategies, the metrics, the health score,
the early-payoff scenarios and the scheduled projection, and returns them in
a single :class:`~debt_planner.data_models.DebtReport`. ``report_to_dict``
turns any of the result dataclasses into JSON-ready dictionaries.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, is_dataclass
from datetime import date
from typing import Any, Dict, Iterable, Optional, Sequence

from .config import Settings
from .data_models import DebtReport, Loan, User
from .engine import compare_strategies, simulate_all
from .errors import ValidationError
from .metrics import classify_interest, compute_metrics, financial_health, scheduled_projection
from .payoff import payoff_scenarios

logger = logging.getLogger(__name__)


def default_budget(user: User, settings: Optional[Settings] = None) -> float:
    """Share of the monthly salary set aside for debt (half by default)."""
    settings = settings or Settings()
    return user.monthly_salary * settings.budget_fraction


def build_report(
    loans: Sequence[Loan],
    user: User,
    monthly_budget: Optional[float] = None,
    extra_amounts: Optional[Iterable[float]] = None,
    settings: Optional[Settings] = None,
) -> DebtReport:
    settings = settings or Settings()
    if monthly_budget is None:
        monthly_budget = default_budget(user, settings)
    elif monthly_budget < 0:
        raise ValidationError("Monthly budget cannot be negative", "monthlyBudget")
    if extra_amounts is None:
        extra_amounts = settings.extra_amounts

    strategies = simulate_all(loans, monthly_budget)
    report = DebtReport(
        monthly_budget=monthly_budget,
        strategies=strategies,
        comparisons=compare_strategies(strategies),
        interest_classifications={
            name: classify_interest(result.total_interest, user.monthly_salary)
            for name, result in strategies.items()
        },
        metrics=compute_metrics(loans, user.monthly_salary),
        health=financial_health(user, loans),
        payoff_scenarios=payoff_scenarios(loans, extra_amounts),
        projection=scheduled_projection(loans),
    )
    logger.info(
        "Report for %d loans: budget %.2f, health %d (%s)",
        len(loans),
        monthly_budget,
        report.health.score,
        report.health.status,
    )
    return report


def _jsonable(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, float) and value in (float("inf"), float("-inf")):
        return None
    return value


def report_to_dict(obj: Any) -> Any:
    """Convert a result dataclass (or a list/dict of them) into plain JSON types."""
    if is_dataclass(obj) and not isinstance(obj, type):
        data: Dict[str, Any] = asdict(obj)
        # derived values consumers expect next to the raw fields
        if hasattr(obj, "months") and "snapshots" in data:
            data["months"] = obj.months
        if isinstance(obj, DebtReport):
            for name, result in obj.strategies.items():
                data["strategies"][name]["months"] = result.months
        return _jsonable(data)
    if isinstance(obj, dict):
        return {str(k): report_to_dict(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [report_to_dict(v) for v in obj]
    return _jsonable(obj)
