"""Affordability and risk metrics derived from a portfolio and its owner.

Every ratio here is expressed in percent and goes through
:func:`~debt_planner.utils.percent_of`, so a zero income or an empty portfolio
produces zeros rather than a ``ZeroDivisionError``.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence, Tuple

from .data_models import (
    FinancialHealth,
    InterestClassification,
    Loan,
    LoanMetric,
    Metrics,
    MonthlySnapshot,
    User,
)
from .utils import percent_of

logger = logging.getLogger(__name__)

RETIREMENT_AGE = 60
NEAR_RETIREMENT_AGE = 50
MAX_TERM_YEARS = 30
DEFAULT_INTEREST_RATE = 10.0
INCOME_SHARE_FOR_DEBT = 0.5
LOW_INCOME_THRESHOLD = 30000

# (inclusive upper bound of monthly interest as % of income, level, description)
INTEREST_BANDS: Tuple[Tuple[float, str, str], ...] = (
    (10.0, "Excellent", "Your interest burden is very manageable relative to your income."),
    (20.0, "Good", "Your interest payments are at a reasonable level."),
    (30.0, "Moderate", "Consider ways to reduce your interest burden."),
    (
        math.inf,
        "High",
        "Your interest burden is significant. Consider debt consolidation or refinancing options.",
    ),
)

# (minimum score, status), checked in order; anything lower is "At Risk"
HEALTH_THRESHOLDS: Tuple[Tuple[int, str], ...] = ((80, "Excellent"), (60, "Good"), (40, "Fair"))
NEAR_RETIREMENT_HEALTH_THRESHOLDS: Tuple[Tuple[int, str], ...] = (
    (85, "Excellent"),
    (70, "Good"),
    (50, "Fair"),
)
AT_RISK = "At Risk"


def total_debt(loans: Sequence[Loan]) -> float:
    return sum(loan.principal for loan in loans)


def total_monthly_payment(loans: Sequence[Loan]) -> float:
    return sum(loan.minimum_payment for loan in loans)


def debt_to_income_ratio(loans: Sequence[Loan], monthly_salary: float) -> float:
    """Monthly minimum payments as a percentage of monthly salary."""
    return percent_of(total_monthly_payment(loans), monthly_salary)


def total_debt_to_income_ratio(loans: Sequence[Loan], monthly_salary: float) -> float:
    """Outstanding principal as a percentage of annual income."""
    return percent_of(total_debt(loans), monthly_salary * 12)


def loan_metric(loan: Loan, monthly_salary: float) -> LoanMetric:
    """Cost of one loan if it is paid at its minimum for its stated term."""
    total_interest = loan.minimum_payment * loan.duration - loan.principal
    if total_interest < 0:
        logger.warning(
            "Loan %r: %d payments of %.2f total less than the principal %.2f",
            loan.name,
            loan.duration,
            loan.minimum_payment,
            loan.principal,
        )
    return LoanMetric(
        name=loan.name,
        principal=loan.principal,
        total_interest=total_interest,
        monthly_payment=loan.minimum_payment,
        payment_percentage=percent_of(loan.minimum_payment, monthly_salary),
    )


def compute_metrics(loans: Sequence[Loan], monthly_salary: float) -> Metrics:
    return Metrics(
        debt_to_income_ratio=debt_to_income_ratio(loans, monthly_salary),
        loan_metrics=[loan_metric(loan, monthly_salary) for loan in loans],
        total_monthly_payment=total_monthly_payment(loans),
    )


def classify_interest_ratio(ratio: float) -> InterestClassification:
    """Bucket a monthly-interest-to-income percentage; bounds are inclusive."""
    for upper, level, description in INTEREST_BANDS:
        if ratio <= upper:
            return InterestClassification(level=level, description=description, ratio=ratio)
    # NaN compares false against every bound
    _, level, description = INTEREST_BANDS[-1]
    return InterestClassification(level=level, description=description, ratio=ratio)


def classify_interest(total_interest: float, monthly_salary: float) -> InterestClassification:
    """Classify a total interest bill by its monthly average against salary."""
    return classify_interest_ratio(percent_of(total_interest / 12, monthly_salary))


def years_to_retirement(age: Optional[int]) -> Optional[int]:
    if age is None:
        return None
    return max(0, RETIREMENT_AGE - age)


def is_retired(age: Optional[int]) -> bool:
    return age is not None and age >= RETIREMENT_AGE


def is_near_retirement(age: Optional[int]) -> bool:
    return age is not None and age > NEAR_RETIREMENT_AGE


def average_interest_rate(loans: Sequence[Loan]) -> float:
    if not loans:
        return DEFAULT_INTEREST_RATE
    return sum(loan.rate for loan in loans) / len(loans)


def max_additional_loan(user: User, loans: Sequence[Loan]) -> float:
    """Largest new loan the user could reasonably take on.

    Combines the income headroom (half the salary minus current minimums),
    an age factor that reaches zero at retirement, a debt-burden factor and
    the average rate of the existing loans. Users with no stated age are
    treated as having the full horizon: a 30-year (``MAX_TERM_YEARS``) term
    and an age factor of 1.
    """
    if user.monthly_salary <= 0:
        return 0.0

    salary = user.monthly_salary
    headroom = salary * INCOME_SHARE_FOR_DEBT - total_monthly_payment(loans)
    total_dti = total_debt_to_income_ratio(loans, salary)

    if is_retired(user.age) or total_dti > 80:
        return 0.0
    if is_near_retirement(user.age) or total_dti > 60:
        # only one year of payments worth of borrowing
        return max(0.0, headroom * 12)

    if user.age is None:
        age_factor = 1.0
        term_years = MAX_TERM_YEARS
    else:
        age_factor = max(0.0, (RETIREMENT_AGE - user.age) / 35)
        term_years = min(RETIREMENT_AGE - user.age, MAX_TERM_YEARS)
    debt_burden_factor = max(0.0, 1 - total_dti / 100)
    amount = (headroom * term_years * 12 * age_factor * debt_burden_factor) / (
        1 + average_interest_rate(loans) / 100
    )
    return max(0.0, amount)


def health_score(user: User, loans: Sequence[Loan]) -> int:
    score = 100

    if is_retired(user.age):
        score -= 30
    elif is_near_retirement(user.age):
        score -= 15

    dti = debt_to_income_ratio(loans, user.monthly_salary)
    if dti > 50:
        score -= 30
    elif dti > 40:
        score -= 20
    elif dti > 30:
        score -= 10

    total_dti = total_debt_to_income_ratio(loans, user.monthly_salary)
    if total_dti > 200:
        score -= 30
    elif total_dti > 150:
        score -= 20
    elif total_dti > 100:
        score -= 10

    if user.work_experience < 2:
        score -= 15

    return max(0, score)


def health_status(score: int, near_retirement: bool = False) -> str:
    thresholds = NEAR_RETIREMENT_HEALTH_THRESHOLDS if near_retirement else HEALTH_THRESHOLDS
    for minimum, status in thresholds:
        if score >= minimum:
            return status
    return AT_RISK


def recommendations(user: User, loans: Sequence[Loan]) -> List[str]:
    dti = debt_to_income_ratio(loans, user.monthly_salary)
    advice: List[str] = []

    if is_retired(user.age):
        advice.append("Focus on managing existing debt rather than taking new loans")
        advice.append("Consider downsizing or debt consolidation options")
    elif is_near_retirement(user.age):
        advice.append("Prioritize debt reduction before retirement")
        advice.append("Avoid long-term loan commitments")
        if dti > 30:
            advice.append("Consider accelerating debt payments to be debt-free by retirement")
    else:
        if dti > 43:
            advice.append("Work on reducing current debt before considering new loans")
        if user.work_experience <= 2:
            advice.append("Build more work experience to improve loan terms")
        if user.monthly_salary <= LOW_INCOME_THRESHOLD:
            advice.append("Focus on increasing income before taking on additional debt")

    advice.append("Maintain timely payments on existing loans")
    return advice


def financial_health(user: User, loans: Sequence[Loan]) -> FinancialHealth:
    score = health_score(user, loans)
    near = is_near_retirement(user.age)
    return FinancialHealth(
        score=score,
        status=health_status(score, near),
        monthly_income=user.monthly_salary,
        total_debt=total_debt(loans),
        debt_to_income_ratio=debt_to_income_ratio(loans, user.monthly_salary),
        total_debt_to_income_ratio=total_debt_to_income_ratio(loans, user.monthly_salary),
        years_to_retirement=years_to_retirement(user.age),
        near_retirement=near,
        retired=is_retired(user.age),
        max_additional_loan=max_additional_loan(user, loans),
        recommendations=recommendations(user, loans),
    )


def scheduled_balance(loan: Loan, month: int) -> float:
    """Balance left after ``month`` payments of a level-payment loan over its stated term."""
    n = loan.duration
    if month >= n:
        return 0.0
    r = loan.rate / 100 / 12
    if r == 0:
        return loan.principal * (n - month) / n
    # standard remaining balance, falling from the principal to zero; not the
    # rising paid-to-date curve the loan form charted
    growth_n = (1 + r) ** n
    return loan.principal * (growth_n - (1 + r) ** month) / (growth_n - 1)


def scheduled_projection(loans: Sequence[Loan]) -> List[MonthlySnapshot]:
    """Portfolio balance month by month if every loan runs its stated term.

    Covers month 0 through the longest duration; a loan contributes nothing
    once it is past its own term.
    """
    if not loans:
        return []
    horizon = max(loan.duration for loan in loans)
    projection: List[MonthlySnapshot] = []
    for month in range(horizon + 1):
        balances = tuple(scheduled_balance(loan, month) for loan in loans)
        projection.append(
            MonthlySnapshot(month=month, total_balance=sum(balances), loan_balances=balances)
        )
    return projection
