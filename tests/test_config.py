import pytest

from debt_planner.config import Settings, load_settings, parse_amount_list, parse_amounts
from debt_planner.errors import ValidationError
from debt_planner.payoff import DEFAULT_EXTRA_AMOUNTS

ENV_VARS = (
    "DEBT_BUDGET_FRACTION",
    "DEBT_EXTRA_AMOUNTS",
    "DEBT_SCHEDULE_MONTHS",
    "LOG_LEVEL",
    "LOG_FILE",
    "WEB_HOST",
    "WEB_PORT",
    "WEB_DEBUG",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    settings = load_settings(dotenv=False)
    assert settings == Settings()
    assert settings.extra_amounts == DEFAULT_EXTRA_AMOUNTS
    assert settings.web_port == 8710
    assert settings.log_file is None


def test_values_from_environment(clean_env):
    clean_env.setenv("DEBT_BUDGET_FRACTION", "0.4")
    clean_env.setenv("DEBT_EXTRA_AMOUNTS", "0, 1k 2500")
    clean_env.setenv("DEBT_SCHEDULE_MONTHS", "6")
    clean_env.setenv("LOG_LEVEL", "DEBUG")
    clean_env.setenv("LOG_FILE", "planner.log")
    clean_env.setenv("WEB_PORT", "9000")
    clean_env.setenv("WEB_DEBUG", "yes")

    settings = load_settings(dotenv=False)
    assert settings.budget_fraction == 0.4
    assert settings.extra_amounts == (0.0, 1000.0, 2500.0)
    assert settings.schedule_months == 6
    assert settings.log_level == "DEBUG"
    assert settings.log_file == "planner.log"
    assert settings.web_port == 9000
    assert settings.web_debug is True


@pytest.mark.parametrize("value", ["0", "1.5", "-0.2", "half"])
def test_invalid_budget_fraction(clean_env, value):
    clean_env.setenv("DEBT_BUDGET_FRACTION", value)
    with pytest.raises(ValidationError) as info:
        load_settings(dotenv=False)
    assert info.value.field == "DEBT_BUDGET_FRACTION"


def test_invalid_schedule_months(clean_env):
    clean_env.setenv("DEBT_SCHEDULE_MONTHS", "twelve")
    with pytest.raises(ValidationError):
        load_settings(dotenv=False)


def test_parse_amount_list():
    assert parse_amount_list("") == ()
    assert parse_amount_list("5k,10k") == (5000.0, 10000.0)
    with pytest.raises(ValidationError):
        parse_amount_list("5000, -1")


def test_parse_amounts_keeps_each_value_whole():
    assert parse_amounts(["5,000", "1.5k", 250]) == (5000.0, 1500.0, 250.0)
    assert parse_amounts([]) == ()
    with pytest.raises(ValidationError) as info:
        parse_amounts(["100", "-5"], "extra")
    assert info.value.field == "extra[1]"


def test_schedule_months_bounded(clean_env):
    clean_env.setenv("DEBT_SCHEDULE_MONTHS", "361")
    with pytest.raises(ValidationError) as info:
        load_settings(dotenv=False)
    assert info.value.field == "DEBT_SCHEDULE_MONTHS"
