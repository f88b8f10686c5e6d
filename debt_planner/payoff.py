"""Early-payoff scenarios: what a flat extra monthly amount buys.

Unlike the strategy simulator, which sends all spare budget to one loan,
each scenario here spreads its extra amount over every active loan in
proportion to that loan's share of the balance outstanding at the start of
the month.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from .amortization import step
from .data_models import COMPLETED, EXHAUSTED, Loan, PayoffScenario
from .engine import MAX_MONTHS, check_loans, new_states
from .errors import ValidationError
from .utils import parse_amount, safe_ratio

logger = logging.getLogger(__name__)

DEFAULT_EXTRA_AMOUNTS = (0.0, 5000.0, 10000.0, 15000.0, 20000.0)


def run_scenario(loans: Sequence[Loan], extra_amount: float) -> PayoffScenario:
    """Pay minimums plus ``extra_amount`` every month until the portfolio is clear.

    ``total_saved`` is ``original_balance * months - total_interest_paid``.
    """
    if extra_amount < 0:
        raise ValidationError("Extra payment cannot be negative", "extraAmounts")
    check_loans(loans)

    states = new_states(loans)
    total_balance = sum(s.balance for s in states)
    original_balance = total_balance
    total_interest = 0.0
    months = 0

    while total_balance > 0 and months < MAX_MONTHS:
        for state in states:
            if not state.active:
                continue
            # share uses the balance after this month's interest against the
            # opening total
            share = safe_ratio(state.balance * (1 + state.monthly_rate), total_balance)
            interest, _ = step(state, extra_amount * share)
            total_interest += interest
        total_balance = sum(s.balance for s in states)
        months += 1

    status = COMPLETED if total_balance <= 0 else EXHAUSTED
    logger.debug(
        "payoff scenario extra=%.2f: %d months, interest %.2f (%s)",
        extra_amount,
        months,
        total_interest,
        status,
    )
    return PayoffScenario(
        extra_amount=extra_amount,
        months=months,
        total_interest_paid=total_interest,
        total_saved=original_balance * months - total_interest,
        status=status,
    )


def payoff_scenarios(
    loans: Sequence[Loan], extra_amounts: Iterable[float] = DEFAULT_EXTRA_AMOUNTS
) -> List[PayoffScenario]:
    """Run one independent scenario per extra amount, in the order given."""
    return [
        run_scenario(loans, parse_amount(amount, "extraAmounts")) for amount in extra_amounts
    ]
