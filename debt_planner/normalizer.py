"""Convert raw loan and user records into validated numeric models.

Upstream records arrive with every field as text, in the shape the entry form
stores them::

    {
        "debtName": "Car loan",
        "principalAmount": "100000",
        "interestRate": "10.5",
        "loanDuration": "24",
        "minimumPayment": "7000",
        "loanType": "car",
        "paymentDueDate": "5",
    }

snake_case keys (``principal_amount`` and so on) are accepted as well. Every
check raises :class:`~debt_planner.errors.ValidationError` naming the field.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .data_models import LOAN_TYPES, Loan, User
from .errors import ValidationError
from .utils import parse_amount, parse_percent, parse_whole_number

MAX_LOANS = 10


def _get(record: Mapping[str, Any], camel: str, snake: str, default: Any = None) -> Any:
    value = record.get(camel)
    if value is None:
        value = record.get(snake, default)
    if isinstance(value, str) and not value.strip():
        return default
    return value


def _required(record: Mapping[str, Any], camel: str, snake: str, field: str) -> Any:
    value = _get(record, camel, snake)
    if value is None:
        raise ValidationError("Value is required", field)
    return value


def normalize_loan(record: Mapping[str, Any], prefix: str = "loan") -> Loan:
    """Parse one raw loan record into a :class:`Loan`."""
    if not isinstance(record, Mapping):
        raise ValidationError("Loan must be an object", prefix)

    name = str(_get(record, "debtName", "debt_name", "") or "").strip()
    if not name:
        name = str(_get(record, "name", "name", "") or "").strip()
    if not name:
        raise ValidationError("Debt name is required", f"{prefix}.debtName")

    field = f"{prefix}.principalAmount"
    principal = parse_amount(_required(record, "principalAmount", "principal_amount", field), field)
    if principal <= 0:
        raise ValidationError("Principal amount must be greater than 0", field)

    field = f"{prefix}.interestRate"
    rate = parse_percent(_required(record, "interestRate", "interest_rate", field), field)
    if rate <= 0 or rate > 100:
        raise ValidationError("Interest rate must be between 0 and 100", field)

    field = f"{prefix}.loanDuration"
    duration = parse_whole_number(_required(record, "loanDuration", "loan_duration", field), field)
    if duration <= 0:
        raise ValidationError("Loan duration must be greater than 0", field)

    field = f"{prefix}.minimumPayment"
    minimum_payment = parse_amount(_required(record, "minimumPayment", "minimum_payment", field), field)
    if minimum_payment <= 0:
        raise ValidationError("Minimum payment must be greater than 0", field)

    field = f"{prefix}.paymentDueDate"
    due_day = parse_whole_number(_get(record, "paymentDueDate", "payment_due_date", 1), field)
    if due_day < 1 or due_day > 31:
        raise ValidationError("Payment due date must be a day between 1 and 31", field)

    loan_type = str(_get(record, "loanType", "loan_type", "personal")).strip().lower()
    if loan_type not in LOAN_TYPES:
        raise ValidationError(
            f"Loan type must be one of {', '.join(LOAN_TYPES)}", f"{prefix}.loanType"
        )

    return Loan(
        name=name,
        principal=principal,
        rate=rate,
        duration=duration,
        minimum_payment=minimum_payment,
        due_day=due_day,
        loan_type=loan_type,
    )


def normalize_loans(records: Optional[Iterable[Mapping[str, Any]]]) -> List[Loan]:
    """Parse a list of raw loan records, checking the portfolio size."""
    if records is None:
        return []
    if isinstance(records, (str, bytes, Mapping)):
        raise ValidationError("Loans must be a list", "loans")
    items = list(records)
    if len(items) > MAX_LOANS:
        raise ValidationError(f"Number of loans must be at most {MAX_LOANS}", "loans")
    return [normalize_loan(item, f"loans[{i}]") for i, item in enumerate(items)]


def normalize_user(record: Mapping[str, Any], prefix: str = "userDetails") -> User:
    """Parse the raw user record into a :class:`User`."""
    if not isinstance(record, Mapping):
        raise ValidationError("User details must be an object", prefix)

    field = f"{prefix}.monthlySalary"
    salary = parse_amount(_required(record, "monthlySalary", "monthly_salary", field), field)
    if salary <= 0:
        raise ValidationError("Monthly salary must be greater than 0", field)

    field = f"{prefix}.workExperience"
    experience = parse_amount(_get(record, "workExperience", "work_experience", 0), field)
    if experience < 0:
        raise ValidationError("Work experience cannot be negative", field)

    age: Optional[int] = None
    raw_age = _get(record, "age", "age")
    if raw_age is not None:
        field = f"{prefix}.age"
        age = parse_whole_number(raw_age, field)
        if age < 0:
            raise ValidationError("Age cannot be negative", field)

    return User(
        monthly_salary=salary,
        work_experience=experience,
        age=age,
        full_name=str(_get(record, "fullName", "full_name", "") or "").strip(),
        occupation=str(_get(record, "occupation", "occupation", "") or "").strip(),
    )


def normalize_portfolio(document: Mapping[str, Any]) -> Tuple[List[Loan], User]:
    """Parse a stored calculation document ``{"userDetails": ..., "loans": [...]}``."""
    if not isinstance(document, Mapping):
        raise ValidationError("Portfolio must be an object")
    user_record = _get(document, "userDetails", "user_details")
    if user_record is None:
        raise ValidationError("Value is required", "userDetails")
    user = normalize_user(user_record)
    loans = normalize_loans(document.get("loans"))
    return loans, user


def _number_text(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def loan_to_record(loan: Loan) -> Dict[str, str]:
    """Serialize a :class:`Loan` back into the raw record shape."""
    return {
        "debtName": loan.name,
        "principalAmount": _number_text(loan.principal),
        "interestRate": _number_text(loan.rate),
        "loanDuration": str(loan.duration),
        "minimumPayment": _number_text(loan.minimum_payment),
        "loanType": loan.loan_type,
        "paymentDueDate": str(loan.due_day),
    }


def user_to_record(user: User) -> Dict[str, str]:
    record = {
        "fullName": user.full_name,
        "occupation": user.occupation,
        "monthlySalary": _number_text(user.monthly_salary),
        "workExperience": _number_text(user.work_experience),
    }
    if user.age is not None:
        record["age"] = str(user.age)
    return record


def portfolio_to_document(loans: Sequence[Loan], user: User) -> Dict[str, Any]:
    return {
        "userDetails": user_to_record(user),
        "loans": [loan_to_record(loan) for loan in loans],
    }
