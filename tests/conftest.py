from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from debt_planner.data_models import Loan, User


def make_loan(
    name: str = "Loan",
    principal: float = 10000.0,
    rate: float = 10.0,
    duration: int = 24,
    minimum_payment: float = 500.0,
    due_day: int = 1,
    loan_type: str = "personal",
) -> Loan:
    return Loan(
        name=name,
        principal=principal,
        rate=rate,
        duration=duration,
        minimum_payment=minimum_payment,
        due_day=due_day,
        loan_type=loan_type,
    )


@pytest.fixture
def example_loans() -> list[Loan]:
    # The two-loan portfolio used throughout: a cheaper short loan and a
    # pricier long one.
    return [
        make_loan("Home", 50000, 8.5, 12, 5000, due_day=5, loan_type="home"),
        make_loan("Car", 100000, 10.5, 24, 7000, due_day=10, loan_type="car"),
    ]


@pytest.fixture
def example_user() -> User:
    return User(monthly_salary=150000, work_experience=5, age=30, full_name="Test User")


@pytest.fixture
def example_document() -> Dict[str, Any]:
    return {
        "userDetails": {
            "fullName": "Test User",
            "occupation": "Engineer",
            "monthlySalary": "150000",
            "workExperience": "5",
            "age": "30",
        },
        "loans": [
            {
                "debtName": "Home",
                "principalAmount": "50000",
                "interestRate": "8.5",
                "loanDuration": "12",
                "minimumPayment": "5000",
                "loanType": "home",
                "paymentDueDate": "5",
            },
            {
                "debtName": "Car",
                "principalAmount": "100000",
                "interestRate": "10.5",
                "loanDuration": "24",
                "minimumPayment": "7000",
                "loanType": "car",
                "paymentDueDate": "10",
            },
        ],
    }


@pytest.fixture
def portfolio_file(tmp_path: Path, example_document: Dict[str, Any]) -> Path:
    p = tmp_path / "portfolio.json"
    p.write_text(json.dumps(example_document), encoding="utf-8")
    return p
