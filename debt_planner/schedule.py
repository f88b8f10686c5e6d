"""Recommended payment schedule: dated payments for the coming months.

The schedule answers "what do I pay, to which loan, and when" for a short
horizon (a year by default). Each month the strategy picks the loan that gets
the spare budget on top of its minimum; every other active loan gets its
minimum. Payments fall on each loan's due day, clamped to the month length.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional, Sequence

from .amortization import step
from .data_models import Loan, ScheduledPayment
from .engine import MAX_MONTHS, check_loans, check_strategy, extra_payment, new_states, prioritize
from .errors import ValidationError
from .utils import add_months, on_day

DEFAULT_SCHEDULE_MONTHS = 12


def payment_schedule(
    loans: Sequence[Loan],
    strategy: str,
    monthly_budget: float,
    months: int = DEFAULT_SCHEDULE_MONTHS,
    start: Optional[date] = None,
) -> List[ScheduledPayment]:
    """Build the dated payment list for the first ``months`` months.

    Parameters
    ----------
    loans: Sequence[Loan]
        The portfolio.
    strategy: str
        Ordering used to pick the loan receiving the extra payment.
    monthly_budget: float
        Total monthly amount for debt, minimums included.
    months: int
        Number of months to schedule, at most ``MAX_MONTHS``.
    start: date, optional
        Month of the first payments; defaults to the current month.
    """
    strategy = check_strategy(strategy)
    check_loans(loans)
    if months < 0:
        raise ValidationError("Number of months cannot be negative", "months")
    if months > MAX_MONTHS:
        raise ValidationError(f"Number of months cannot exceed {MAX_MONTHS}", "months")

    first_month = (start or date.today()).replace(day=1)
    try:
        add_months(first_month, max(months - 1, 0))
    except (ValueError, OverflowError):
        raise ValidationError("Schedule runs past the last supported date", "startDate")
    states = new_states(loans)
    extra = extra_payment(loans, monthly_budget)
    schedule: List[ScheduledPayment] = []

    for month in range(months):
        ranked = prioritize(states, strategy)
        if not ranked:
            break
        month_start = add_months(first_month, month)
        for position, state in enumerate(ranked):
            interest, principal = step(state, extra if position == 0 else 0.0)
            schedule.append(
                ScheduledPayment(
                    date=on_day(month_start, state.due_day),
                    loan_name=state.name,
                    amount=interest + principal,
                    principal_payment=principal,
                    interest_payment=interest,
                    remaining_balance=state.balance,
                )
            )
    return schedule
