"""JSON API for the debt planner.

The API is stateless: every request carries the portfolio, and the response
carries the results. Storing portfolios is left to whoever calls it.
"""

import logging

from flask import Flask, jsonify, request

from debt_planner.config import load_settings, parse_amount_list, parse_amounts
from debt_planner.data_models import STRATEGIES
from debt_planner.engine import check_strategy, compare_strategies, simulate, simulate_all
from debt_planner.errors import ValidationError
from debt_planner.logging_config import configure_logging
from debt_planner.normalizer import normalize_loans, normalize_portfolio
from debt_planner.payoff import payoff_scenarios
from debt_planner.report import build_report, report_to_dict
from debt_planner.schedule import payment_schedule
from debt_planner.utils import parse_amount, parse_whole_number, parse_year_month

logger = logging.getLogger(__name__)

settings = load_settings()
app = Flask(__name__)
app.config["SETTINGS"] = settings


def _payload() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def _budget(data: dict, field: str = "monthlyBudget"):
    raw = data.get(field)
    if raw is None or raw == "":
        return None
    value = parse_amount(raw, field)
    if value < 0:
        raise ValidationError("Monthly budget cannot be negative", field)
    return value


def _required_budget(data: dict) -> float:
    value = _budget(data)
    if value is None:
        raise ValidationError("Value is required", "monthlyBudget")
    return value


def _extra_amounts(data: dict):
    raw = data.get("extraAmounts")
    if raw is None:
        return settings.extra_amounts
    if isinstance(raw, str):
        return parse_amount_list(raw)
    if not isinstance(raw, list):
        raise ValidationError("Extra amounts must be a list", "extraAmounts")
    return parse_amounts(raw)


@app.errorhandler(ValidationError)
def handle_validation_error(exc: ValidationError):
    logger.info("Rejected request to %s: %s", request.path, exc)
    return jsonify({"error": exc.message, "field": exc.field}), 400


@app.get("/health")
def health():
    return jsonify({"status": "ok"})


@app.post("/api/analyze")
def analyze():
    data = _payload()
    loans, user = normalize_portfolio(data)
    report = build_report(
        loans,
        user,
        monthly_budget=_budget(data),
        extra_amounts=_extra_amounts(data),
        settings=settings,
    )
    return jsonify(report_to_dict(report))


@app.post("/api/simulate")
def simulate_strategies():
    data = _payload()
    loans = normalize_loans(data.get("loans"))
    monthly_budget = _required_budget(data)
    strategy = data.get("strategy") or "all"
    if strategy == "all":
        results = simulate_all(loans, monthly_budget)
    else:
        name = check_strategy(strategy)
        results = {name: simulate(loans, monthly_budget, name)}
    return jsonify(
        {
            "monthlyBudget": monthly_budget,
            "strategies": report_to_dict(results),
            "comparisons": report_to_dict(compare_strategies(results)),
        }
    )


@app.post("/api/payoff")
def payoff():
    data = _payload()
    loans = normalize_loans(data.get("loans"))
    scenarios = payoff_scenarios(loans, _extra_amounts(data))
    return jsonify({"scenarios": report_to_dict(scenarios)})


@app.post("/api/schedule")
def schedule():
    data = _payload()
    loans = normalize_loans(data.get("loans"))
    months = data.get("months")
    start = data.get("startDate")
    payments = payment_schedule(
        loans,
        data.get("strategy") or STRATEGIES[0],
        _required_budget(data),
        months=settings.schedule_months if months is None else parse_whole_number(months, "months"),
        start=parse_year_month(start) if start else None,
    )
    return jsonify({"payments": report_to_dict(payments)})


if __name__ == "__main__":
    configure_logging(settings.log_level, settings.log_file)
    logger.info("Starting debt planner API on %s:%d", settings.web_host, settings.web_port)
    app.run(host=settings.web_host, port=settings.web_port, debug=settings.web_debug)
