import csv
import json

import pytest
from click.testing import CliRunner

from debt_planner.main import cli


@pytest.fixture
def runner(monkeypatch):
    for name in ("DEBT_BUDGET_FRACTION", "DEBT_EXTRA_AMOUNTS", "DEBT_SCHEDULE_MONTHS", "LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    return CliRunner()


def test_simulate_all_strategies(runner, portfolio_file):
    result = runner.invoke(cli, ["--log-level", "WARNING", "simulate", str(portfolio_file)])
    assert result.exit_code == 0, result.output
    assert "Monthly budget: 75000.00" in result.output
    assert "Avalanche Method" in result.output
    assert "Snowball Method" in result.output
    assert "Hybrid Method" in result.output
    assert "(optimal)" in result.output


def test_simulate_single_strategy_with_balances(runner, portfolio_file):
    result = runner.invoke(
        cli, ["simulate", str(portfolio_file), "-s", "snowball", "-b", "20k", "--balances"]
    )
    assert result.exit_code == 0, result.output
    assert "Monthly budget: 20000.00" in result.output
    assert "Snowball balances" in result.output
    assert "Avalanche Method" not in result.output


def test_simulate_exports_json_and_csv(runner, portfolio_file, tmp_path):
    out_json = tmp_path / "result.json"
    result = runner.invoke(cli, ["simulate", str(portfolio_file), "--output", str(out_json)])
    assert result.exit_code == 0, result.output
    data = json.loads(out_json.read_text(encoding="utf-8"))
    assert set(data) == {"avalanche", "snowball", "hybrid"}

    out_csv = tmp_path / "result.csv"
    result = runner.invoke(cli, ["simulate", str(portfolio_file), "-s", "avalanche", "--output", str(out_csv)])
    assert result.exit_code == 0, result.output
    with out_csv.open(newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["Strategy", "Month", "Total_Balance", "Target", "Home", "Car"]
    assert len(rows) == 4
    assert rows[1][3] == "Car"


def test_unsupported_output_format(runner, portfolio_file, tmp_path):
    result = runner.invoke(cli, ["payoff", str(portfolio_file), "--output", str(tmp_path / "x.txt")])
    assert result.exit_code != 0


def test_metrics(runner, portfolio_file):
    result = runner.invoke(cli, ["metrics", str(portfolio_file)])
    assert result.exit_code == 0, result.output
    assert "Debt-to-income ratio : 8.0%" in result.output
    assert "Excellent" in result.output


def test_payoff_with_custom_extras(runner, portfolio_file):
    result = runner.invoke(cli, ["--log-level", "WARNING", "payoff", str(portfolio_file), "--extra", "0", "--extra", "5k"])
    assert result.exit_code == 0, result.output
    extras = [line.split()[0] for line in result.output.splitlines()[1:] if line.strip()]
    assert extras[:2] == ["0", "5000"]


def test_payoff_rejects_negative_extra(runner, portfolio_file):
    result = runner.invoke(cli, ["payoff", str(portfolio_file), "--extra", "-5"])
    assert result.exit_code != 0


def test_schedule(runner, portfolio_file):
    result = runner.invoke(cli, ["schedule", str(portfolio_file), "--start-date", "2024-01"])
    assert result.exit_code == 0, result.output
    assert "2024-01-05" in result.output
    assert "2024-01-10" in result.output


def test_schedule_rejects_bad_start_date(runner, portfolio_file):
    result = runner.invoke(cli, ["schedule", str(portfolio_file), "--start-date", "soon"])
    assert result.exit_code != 0


def test_report_to_json(runner, portfolio_file, tmp_path):
    out = tmp_path / "report.json"
    result = runner.invoke(cli, ["report", str(portfolio_file), "--output", str(out)])
    assert result.exit_code == 0, result.output
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["monthly_budget"] == 75000
    assert data["health"]["status"] == "Excellent"
    assert len(data["payoff_scenarios"]) == 5


def test_invalid_portfolio(runner, tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"userDetails": {"monthlySalary": "0"}, "loans": []}), encoding="utf-8")
    result = runner.invoke(cli, ["metrics", str(bad)])
    assert result.exit_code != 0
    assert "Invalid portfolio" in result.output

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    result = runner.invoke(cli, ["metrics", str(broken)])
    assert result.exit_code != 0
    assert "not valid JSON" in result.output


def test_payoff_extra_with_thousands_separator(runner, portfolio_file):
    result = runner.invoke(cli, ["--log-level", "WARNING", "payoff", str(portfolio_file), "--extra", "5,000"])
    assert result.exit_code == 0, result.output
    extras = [line.split()[0] for line in result.output.splitlines()[1:] if line.strip()]
    assert extras == ["5000"]


def test_schedule_rejects_too_many_months(runner, portfolio_file):
    result = runner.invoke(cli, ["schedule", str(portfolio_file), "--months", "100000"])
    assert result.exit_code == 2
    assert "Traceback" not in result.output
    assert "cannot exceed 360" in result.output
