"""Data models for the debt planner.

This module defines dataclasses representing the entities used by the
planner: the loans and user a portfolio is made of, the mutable per-run loan
state the simulator advances month by month, and the results the simulator,
metrics calculator and payoff engine produce. Using dataclasses makes it easy
to construct, inspect and serialize these structures.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Tuple

AVALANCHE = "avalanche"
SNOWBALL = "snowball"
HYBRID = "hybrid"
STRATEGIES: Tuple[str, ...] = (AVALANCHE, SNOWBALL, HYBRID)

COMPLETED = "completed"
EXHAUSTED = "exhausted"

LOAN_TYPES: Tuple[str, ...] = ("personal", "home", "car", "education", "credit-card", "other")


@dataclass(frozen=True)
class Loan:
    """A debt as entered by the user.

    Attributes
    ----------
    name: str
        Label shown next to the loan in results.
    principal: float
        Outstanding amount at the start of the simulation.
    rate: float
        Annual nominal interest rate in percent (``10.5`` means 10.5 %).
    duration: int
        Stated term in months.
    minimum_payment: float
        Required monthly payment.
    due_day: int
        Day of the month the payment is due (1-31).
    loan_type: str
        One of ``LOAN_TYPES``.
    """

    name: str
    principal: float
    rate: float
    duration: int
    minimum_payment: float
    due_day: int = 1
    loan_type: str = "personal"


@dataclass(frozen=True)
class User:
    """The borrower. Only income, experience and age feed the calculations."""

    monthly_salary: float
    work_experience: float = 0.0
    age: Optional[int] = None
    full_name: str = ""
    occupation: str = ""

    @property
    def annual_income(self) -> float:
        return self.monthly_salary * 12


@dataclass
class LoanState:
    """Balance of one loan inside a single simulation run.

    A fresh list of states is built for every run so strategies and scenarios
    never see each other's balances.
    """

    index: int
    name: str
    balance: float
    rate: float  # annual, percent
    monthly_rate: float  # fraction per month
    minimum_payment: float
    due_day: int = 1

    @classmethod
    def from_loan(cls, loan: Loan, index: int) -> "LoanState":
        return cls(
            index=index,
            name=loan.name,
            balance=float(loan.principal),
            rate=float(loan.rate),
            monthly_rate=loan.rate / 100 / 12,
            minimum_payment=float(loan.minimum_payment),
            due_day=loan.due_day,
        )

    @property
    def active(self) -> bool:
        return self.balance > 0


@dataclass
class MonthlySnapshot:
    """Portfolio balance at the end of one simulated month.

    ``target`` is the portfolio index of the loan that received the strategy
    extra payment that month, or ``None`` when no extra was applied.
    """

    month: int
    total_balance: float
    loan_balances: Tuple[float, ...] = ()
    target: Optional[int] = None


@dataclass
class StrategyResult:
    strategy: str
    snapshots: List[MonthlySnapshot] = field(default_factory=list)
    total_interest: float = 0.0
    status: str = COMPLETED

    @property
    def months(self) -> int:
        return len(self.snapshots)

    @property
    def converged(self) -> bool:
        return self.status == COMPLETED


@dataclass
class StrategyComparison:
    """How one strategy fares against the cheapest one."""

    strategy: str
    optimal: bool
    months: int
    total_interest: float
    months_diff: int
    interest_diff: float


@dataclass
class PayoffScenario:
    extra_amount: float
    months: int
    total_interest_paid: float
    total_saved: float
    status: str = COMPLETED


@dataclass
class LoanMetric:
    name: str
    principal: float
    total_interest: float
    monthly_payment: float
    payment_percentage: float

    @property
    def negative_interest(self) -> bool:
        """True when the stated payments total less than the principal."""
        return self.total_interest < 0


@dataclass
class Metrics:
    debt_to_income_ratio: float
    loan_metrics: List[LoanMetric]
    total_monthly_payment: float


@dataclass(frozen=True)
class InterestClassification:
    level: str
    description: str
    ratio: float


@dataclass
class FinancialHealth:
    """Overall health score with the inputs that drove it."""

    score: int
    status: str
    monthly_income: float
    total_debt: float
    debt_to_income_ratio: float
    total_debt_to_income_ratio: float
    years_to_retirement: Optional[int]
    near_retirement: bool
    retired: bool
    max_additional_loan: float
    recommendations: List[str] = field(default_factory=list)


@dataclass
class ScheduledPayment:
    """One dated payment in the recommended payment schedule."""

    date: date
    loan_name: str
    amount: float
    principal_payment: float
    interest_payment: float
    remaining_balance: float


@dataclass
class DebtReport:
    """Everything the planner computes for one portfolio."""

    monthly_budget: float
    strategies: Dict[str, StrategyResult]
    comparisons: List[StrategyComparison]
    interest_classifications: Dict[str, InterestClassification]
    metrics: Metrics
    health: FinancialHealth
    payoff_scenarios: List[PayoffScenario]
    projection: List[MonthlySnapshot]
