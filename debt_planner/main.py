"""Command-line interface for the debt planner.

This module uses the ``click`` library to implement a multi-command
interface. Every command reads a portfolio JSON document (the same shape the
entry form stores: ``{"userDetails": {...}, "loans": [...]}``), runs the
requested calculation and prints it, or exports it to JSON/CSV.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import click

from .config import Settings, load_settings, parse_amounts
from .data_models import STRATEGIES, Loan, StrategyResult, User
from .engine import compare_strategies, simulate, simulate_all
from .errors import ValidationError
from .formatter import (
    print_balances,
    print_health,
    print_metrics,
    print_payment_schedule,
    print_scenarios,
    print_strategies,
)
from .logging_config import configure_logging
from .metrics import classify_interest, compute_metrics, financial_health
from .normalizer import normalize_portfolio
from .payoff import payoff_scenarios
from .report import build_report, default_budget, report_to_dict
from .schedule import payment_schedule
from .utils import parse_amount, parse_year_month


def load_portfolio(path: Path) -> Tuple[List[Loan], User]:
    """Read and normalize a portfolio JSON file."""
    try:
        with path.open("r", encoding="utf-8") as f:
            document = json.load(f)
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"{path} is not valid JSON: {exc}")
    try:
        return normalize_portfolio(document)
    except ValidationError as exc:
        raise click.ClickException(f"Invalid portfolio: {exc}")


def resolve_budget(budget: Optional[str], user: User, settings: Settings) -> float:
    if not budget:
        return default_budget(user, settings)
    try:
        value = parse_amount(budget, "budget")
    except ValidationError as exc:
        raise click.BadParameter(str(exc), param_hint="--budget")
    if value < 0:
        raise click.BadParameter("Budget cannot be negative", param_hint="--budget")
    return value


def export_to_json(path: Path, data: Any) -> None:
    """Export any result structure to a JSON file."""
    with path.open("w", encoding="utf-8") as f:
        json.dump(report_to_dict(data), f, indent=2)


def export_to_csv(path: Path, results: Dict[str, StrategyResult], loans: List[Loan]) -> None:
    """Export strategy balance trajectories to a CSV file, one row per strategy month."""
    header = ["Strategy", "Month", "Total_Balance", "Target"] + [loan.name for loan in loans]
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for name, result in results.items():
            for snap in result.snapshots:
                target = "" if snap.target is None else loans[snap.target].name
                writer.writerow(
                    [name, snap.month, snap.total_balance, target] + list(snap.loan_balances)
                )


def _export(output: str, data: Any, results: Optional[Dict[str, StrategyResult]] = None, loans: Optional[List[Loan]] = None) -> None:
    path = Path(output)
    suffix = path.suffix.lower()
    if suffix == ".json":
        export_to_json(path, data)
    elif suffix == ".csv" and results is not None:
        export_to_csv(path, results, loans or [])
    else:
        allowed = ".json or .csv" if results is not None else ".json"
        raise click.BadParameter(f"Unsupported output format; use {allowed}", param_hint="--output")
    click.echo(f"Results exported to {path}")


portfolio_argument = click.argument(
    "portfolio", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
budget_option = click.option(
    "--budget", "-b", "budget", help="Total monthly amount for debt, minimums included (default: share of salary)"
)


@click.group()
@click.option("--log-level", "log_level", default=None, help="Logging level (default from LOG_LEVEL)")
@click.pass_context
def cli(ctx: click.Context, log_level: Optional[str]) -> None:
    """Compare debt payoff strategies and check affordability."""
    try:
        settings = load_settings()
    except ValidationError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}")
    configure_logging(log_level or settings.log_level, settings.log_file)
    ctx.obj = settings


@cli.command(name="simulate")
@portfolio_argument
@click.option(
    "--strategy",
    "-s",
    "strategy",
    type=click.Choice(list(STRATEGIES) + ["all"]),
    default="all",
    help="Strategy to simulate",
)
@budget_option
@click.option("--balances", "show_balances", is_flag=True, help="Print the month-by-month balance")
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
@click.pass_obj
def simulate_command(
    settings: Settings,
    portfolio: Path,
    strategy: str,
    budget: Optional[str],
    show_balances: bool,
    output: Optional[str],
) -> None:
    """Simulate payoff under one or all strategies."""
    loans, user = load_portfolio(portfolio)
    monthly_budget = resolve_budget(budget, user, settings)
    if strategy == "all":
        results = simulate_all(loans, monthly_budget)
    else:
        results = {strategy: simulate(loans, monthly_budget, strategy)}

    if output:
        _export(output, results, results, loans)
        return
    click.echo(f"Monthly budget: {monthly_budget:.2f}")
    classifications = {
        name: classify_interest(r.total_interest, user.monthly_salary) for name, r in results.items()
    }
    print_strategies(results, compare_strategies(results), classifications)
    if show_balances:
        for name, result in results.items():
            click.echo(f"\n{name.capitalize()} balances")
            print_balances(result)


@cli.command(name="metrics")
@portfolio_argument
@click.option("--output", "output", type=str, help="Output file path (.json)")
@click.pass_obj
def metrics_command(settings: Settings, portfolio: Path, output: Optional[str]) -> None:
    """Print debt-to-income, per-loan cost and financial health."""
    loans, user = load_portfolio(portfolio)
    metrics = compute_metrics(loans, user.monthly_salary)
    health = financial_health(user, loans)
    if output:
        _export(output, {"metrics": metrics, "health": health})
        return
    print_metrics(metrics)
    print_health(health)


@cli.command(name="payoff")
@portfolio_argument
@click.option("--extra", "extra", multiple=True, help="Extra monthly amount; repeat for several scenarios")
@click.option("--output", "output", type=str, help="Output file path (.json)")
@click.pass_obj
def payoff_command(settings: Settings, portfolio: Path, extra: Tuple[str, ...], output: Optional[str]) -> None:
    """Show how extra monthly payments shorten the payoff."""
    loans, user = load_portfolio(portfolio)
    try:
        amounts = parse_amounts(extra, "extra") if extra else settings.extra_amounts
    except ValidationError as exc:
        raise click.BadParameter(str(exc), param_hint="--extra")
    scenarios = payoff_scenarios(loans, amounts)
    if output:
        _export(output, scenarios)
        return
    print_scenarios(scenarios)


@cli.command(name="schedule")
@portfolio_argument
@click.option(
    "--strategy", "-s", "strategy", type=click.Choice(list(STRATEGIES)), default="avalanche", help="Strategy to follow"
)
@budget_option
@click.option("--months", "-m", "months", type=int, default=None, help="Months to schedule")
@click.option("--start-date", "start_date", help="First payment month (YYYY-MM, default: this month)")
@click.pass_obj
def schedule_command(
    settings: Settings,
    portfolio: Path,
    strategy: str,
    budget: Optional[str],
    months: Optional[int],
    start_date: Optional[str],
) -> None:
    """Print the recommended dated payment schedule."""
    loans, user = load_portfolio(portfolio)
    monthly_budget = resolve_budget(budget, user, settings)
    try:
        start = parse_year_month(start_date) if start_date else None
        schedule = payment_schedule(
            loans,
            strategy,
            monthly_budget,
            months=settings.schedule_months if months is None else months,
            start=start,
        )
    except ValidationError as exc:
        raise click.BadParameter(str(exc))
    print_payment_schedule(schedule)


@cli.command(name="report")
@portfolio_argument
@budget_option
@click.option("--output", "output", type=str, help="Output file path (.json)")
@click.pass_obj
def report_command(settings: Settings, portfolio: Path, budget: Optional[str], output: Optional[str]) -> None:
    """Run every calculation and print (or export) the full report."""
    loans, user = load_portfolio(portfolio)
    monthly_budget = resolve_budget(budget, user, settings)
    report = build_report(loans, user, monthly_budget, settings=settings)
    if output:
        _export(output, report)
        return
    click.echo(f"Monthly budget: {report.monthly_budget:.2f}")
    print_strategies(report.strategies, report.comparisons, report.interest_classifications)
    print_metrics(report.metrics)
    print_health(report.health)
    click.echo("")
    print_scenarios(report.payoff_scenarios)


if __name__ == "__main__":
    cli()
