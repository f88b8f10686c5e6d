"""Single-month amortization of one loan.

The stepper capitalizes the month's interest before taking the payment, so a
payment equal to the balance after interest clears the loan. Balances are
plain floats owned by the run that created the :class:`LoanState`.
"""

from __future__ import annotations

from typing import Tuple

from .data_models import LoanState

_EPS = 1e-6  # residual balance treated as paid off


def _settle(state: LoanState) -> None:
    if state.balance < _EPS:
        state.balance = 0.0


def step(state: LoanState, strategy_extra: float = 0.0) -> Tuple[float, float]:
    """Advance ``state`` by one month and return ``(interest, principal_paid)``.

    The minimum payment is taken first, then ``strategy_extra`` on top of it;
    the total is capped at the balance after interest. ``principal_paid`` is
    negative when the payment does not cover the interest. A paid-off loan
    accrues nothing and pays nothing.
    """
    if state.balance <= 0:
        return 0.0, 0.0

    interest = state.balance * state.monthly_rate
    state.balance += interest

    payment = min(state.minimum_payment, state.balance)
    if strategy_extra > 0:
        payment = min(payment + strategy_extra, state.balance)

    state.balance -= payment
    _settle(state)
    return interest, payment - interest


def apply_extra(state: LoanState, amount: float) -> float:
    """Pay ``amount`` off ``state`` outside the regular step; return what was applied."""
    if amount <= 0 or state.balance <= 0:
        return 0.0
    applied = min(amount, state.balance)
    state.balance -= applied
    _settle(state)
    return applied
