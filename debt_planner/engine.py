"""Core simulation engine for the debt planner.

This module runs a loan portfolio month by month under one of three payoff
strategies. Each month every active loan accrues interest and receives its
minimum payment; whatever the monthly budget leaves over after the minimums
is then paid, in full, to the single loan the strategy ranks first:

* ``avalanche`` - highest interest rate first;
* ``snowball`` - smallest current balance first;
* ``hybrid`` - largest ``rate * balance`` first.

Runs stop once every balance is zero or after ``MAX_MONTHS`` months, and the
result records which of the two happened.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .amortization import apply_extra, step
from .data_models import (
    AVALANCHE,
    COMPLETED,
    EXHAUSTED,
    HYBRID,
    SNOWBALL,
    STRATEGIES,
    Loan,
    LoanState,
    MonthlySnapshot,
    StrategyComparison,
    StrategyResult,
)
from .errors import ValidationError

logger = logging.getLogger(__name__)

MAX_MONTHS = 360  # 30 years

_PRIORITY_KEYS: Dict[str, Callable[[LoanState], float]] = {
    AVALANCHE: lambda s: -s.rate,
    SNOWBALL: lambda s: s.balance,
    HYBRID: lambda s: -(s.rate * s.balance),
}


def check_strategy(strategy: str) -> str:
    if not isinstance(strategy, str):
        raise ValidationError(f"Strategy must be a name, got {strategy!r}", "strategy")
    name = strategy.strip().lower()
    if name not in STRATEGIES:
        raise ValidationError(
            f"Unknown strategy {strategy!r}; expected one of {', '.join(STRATEGIES)}", "strategy"
        )
    return name


def check_loans(loans: Sequence[Loan]) -> None:
    """Reject loans the simulator cannot run instead of crashing mid-loop."""
    for i, loan in enumerate(loans):
        if not loan.principal > 0:
            raise ValidationError("Principal amount must be greater than 0", f"loans[{i}].principalAmount")
        if not 0 <= loan.rate <= 100:
            raise ValidationError("Interest rate must be between 0 and 100", f"loans[{i}].interestRate")
        if not loan.minimum_payment > 0:
            raise ValidationError("Minimum payment must be greater than 0", f"loans[{i}].minimumPayment")


def new_states(loans: Sequence[Loan]) -> List[LoanState]:
    """Build the private balance list for one run."""
    return [LoanState.from_loan(loan, i) for i, loan in enumerate(loans)]


def total_minimum_payment(loans: Iterable[Loan]) -> float:
    return sum(loan.minimum_payment for loan in loans)


def extra_payment(loans: Sequence[Loan], monthly_budget: float) -> float:
    """Budget left after all minimum payments (never negative)."""
    return max(0.0, monthly_budget - total_minimum_payment(loans))


def prioritize(states: Iterable[LoanState], strategy: str) -> List[LoanState]:
    """Return the active loans in the order ``strategy`` would pay them.

    ``sorted`` is stable, so loans with equal keys keep portfolio order.
    """
    key = _PRIORITY_KEYS[check_strategy(strategy)]
    return sorted((s for s in states if s.active), key=key)


def _total(states: Iterable[LoanState]) -> float:
    return sum(s.balance for s in states)


def simulate(loans: Sequence[Loan], monthly_budget: float, strategy: str) -> StrategyResult:
    """Simulate paying off ``loans`` with ``monthly_budget`` under ``strategy``.

    Parameters
    ----------
    loans: Sequence[Loan]
        The portfolio. It is never modified; the run works on its own
        ``LoanState`` copies.
    monthly_budget: float
        Total amount available for debt each month, minimums included. A
        budget below the sum of minimums simply means no extra payment.
    strategy: str
        ``"avalanche"``, ``"snowball"`` or ``"hybrid"``.

    Returns
    -------
    StrategyResult
        One snapshot per simulated month and the interest accrued over the
        run. ``status`` is ``"exhausted"`` when the portfolio was not paid
        off within ``MAX_MONTHS``.
    """
    strategy = check_strategy(strategy)
    check_loans(loans)
    result = StrategyResult(strategy=strategy)
    if not loans:
        return result

    states = new_states(loans)
    extra = extra_payment(loans, monthly_budget)
    total_balance = _total(states)
    month = 0

    while total_balance > 0 and month < MAX_MONTHS:
        for state in states:
            interest, _ = step(state)
            result.total_interest += interest

        target: Optional[int] = None
        if extra > 0:
            ranked = prioritize(states, strategy)
            if ranked:
                # The whole extra goes to the first loan; any part of it above
                # that loan's balance is not passed on this month.
                apply_extra(ranked[0], extra)
                target = ranked[0].index

        total_balance = _total(states)
        result.snapshots.append(
            MonthlySnapshot(
                month=month,
                total_balance=total_balance,
                loan_balances=tuple(s.balance for s in states),
                target=target,
            )
        )
        month += 1

    result.status = COMPLETED if total_balance <= 0 else EXHAUSTED
    if result.status == EXHAUSTED:
        logger.info(
            "%s run exhausted after %d months with %.2f outstanding", strategy, month, total_balance
        )
    logger.debug(
        "%s: %d months, total interest %.2f, extra %.2f/month",
        strategy,
        result.months,
        result.total_interest,
        extra,
    )
    return result


def simulate_all(loans: Sequence[Loan], monthly_budget: float) -> Dict[str, StrategyResult]:
    """Run every strategy independently over the same portfolio."""
    return {name: simulate(loans, monthly_budget, name) for name in STRATEGIES}


def compare_strategies(results: Dict[str, StrategyResult]) -> List[StrategyComparison]:
    """Rank strategy results by total interest, cheapest first.

    Each entry carries the month and interest difference against the cheapest
    strategy, which is flagged ``optimal``.
    """
    ranked = sorted(results.values(), key=lambda r: r.total_interest)
    if not ranked:
        return []
    best = ranked[0]
    return [
        StrategyComparison(
            strategy=r.strategy,
            optimal=r is best,
            months=r.months,
            total_interest=r.total_interest,
            months_diff=r.months - best.months,
            interest_diff=r.total_interest - best.total_interest,
        )
        for r in ranked
    ]


def time_to_debt_free(months: int) -> Tuple[int, int]:
    """Split a month count into ``(years, months)``."""
    return divmod(months, 12)
