"""Output helpers for the debt planner.

This module provides simple functions to render strategy results, metrics,
payoff scenarios and payment schedules in a tabular text format. We rely only
on built-in printing and string formatting.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from .data_models import (
    FinancialHealth,
    InterestClassification,
    Metrics,
    PayoffScenario,
    ScheduledPayment,
    StrategyComparison,
    StrategyResult,
)
from .engine import time_to_debt_free

STRATEGY_BLURBS = {
    "avalanche": "Prioritizes high-interest debts first - typically saves the most money",
    "snowball": "Focuses on smallest debts first - builds momentum through quick wins",
    "hybrid": "Balances interest rates and loan sizes - can be optimal for mixed loan portfolios",
}


def _duration(months: int) -> str:
    years, rest = time_to_debt_free(months)
    return f"{years} years {rest} months"


def print_strategies(
    results: Dict[str, StrategyResult],
    comparisons: List[StrategyComparison],
    classifications: Optional[Dict[str, InterestClassification]] = None,
) -> None:
    """Print each strategy, cheapest first, with its gap to the optimal one."""
    print("Repayment strategies")
    print("-" * 72)
    for comp in comparisons:
        result = results[comp.strategy]
        title = f"{comp.strategy.capitalize()} Method"
        if comp.optimal:
            title += " (optimal)"
        print(title)
        print(f"  {STRATEGY_BLURBS.get(comp.strategy, '')}")
        if result.converged:
            print(f"  Time to debt-free : {_duration(result.months)}")
        else:
            print(f"  Not paid off within {_duration(result.months)}")
        print(f"  Total interest    : {result.total_interest:.2f}")
        if classifications and comp.strategy in classifications:
            c = classifications[comp.strategy]
            print(f"  Interest burden   : {c.level} ({c.ratio:.1f}% of monthly income)")
        if not comp.optimal:
            print(f"  vs optimal        : +{comp.interest_diff:.2f} interest, {comp.months_diff:+d} months")
    print("-" * 72)


def print_balances(result: StrategyResult, max_rows: int = 120) -> None:
    """Print the month-by-month total balance of one strategy run."""
    print("Month\tTotalBalance\tTarget")
    for snap in result.snapshots[:max_rows]:
        target = "-" if snap.target is None else str(snap.target + 1)
        print(f"{snap.month}\t{snap.total_balance:.2f}\t{target}")
    if result.months > max_rows:
        print(f"... {result.months - max_rows} more months")


def print_metrics(metrics: Metrics) -> None:
    print("Metrics")
    print("-" * 72)
    print(f"Debt-to-income ratio : {metrics.debt_to_income_ratio:.1f}%")
    print(f"Total monthly payment: {metrics.total_monthly_payment:.2f}")
    print(f"{'Loan':20s} {'Principal':>12s} {'Interest':>12s} {'Payment':>10s} {'% income':>9s}")
    for m in metrics.loan_metrics:
        flag = " *" if m.negative_interest else ""
        print(
            f"{m.name[:20]:20s} {m.principal:12.2f} {m.total_interest:12.2f} "
            f"{m.monthly_payment:10.2f} {m.payment_percentage:8.1f}%{flag}"
        )
    if any(m.negative_interest for m in metrics.loan_metrics):
        print("* stated payments total less than the principal")
    print("-" * 72)


def print_health(health: FinancialHealth) -> None:
    print(f"Financial health     : {health.status} ({health.score}/100)")
    print(f"Monthly income       : {health.monthly_income:.2f}")
    print(f"Total debt           : {health.total_debt:.2f}")
    print(f"Debt-to-income ratio : {health.debt_to_income_ratio:.1f}%")
    print(f"Max additional loan  : {health.max_additional_loan:.0f}")
    if health.near_retirement:
        if health.retired:
            print("Age consideration    : past retirement age")
        else:
            print(f"Age consideration    : {health.years_to_retirement} years from retirement")
    print("Recommendations")
    for line in health.recommendations:
        print(f"  - {line}")


def print_scenarios(scenarios: Iterable[PayoffScenario]) -> None:
    print(f"{'Extra':>10s} {'Months':>7s} {'Interest':>14s} {'Saved':>16s}")
    for s in scenarios:
        months = f"{s.months}" if s.status == "completed" else f"{s.months}+"
        print(f"{s.extra_amount:10.0f} {months:>7s} {s.total_interest_paid:14.2f} {s.total_saved:16.2f}")


def print_payment_schedule(schedule: Iterable[ScheduledPayment]) -> None:
    headers = ["Date", "Loan", "Payment", "Principal", "Interest", "Remaining"]
    print("\t".join(headers))
    for p in schedule:
        row = [
            p.date.strftime("%Y-%m-%d"),
            p.loan_name,
            f"{p.amount:.2f}",
            f"{p.principal_payment:.2f}",
            f"{p.interest_payment:.2f}",
            f"{p.remaining_balance:.2f}",
        ]
        print("\t".join(row))
