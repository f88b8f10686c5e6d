import logging

import pytest

from debt_planner.logging_config import configure_logging, resolve_level


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_resolve_level():
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level(" Warning ") == logging.WARNING
    assert resolve_level(None) == logging.INFO
    assert resolve_level("chatty") is None


def test_configure_logging_sets_root_and_quiets_werkzeug():
    assert configure_logging("DEBUG") == logging.DEBUG
    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("werkzeug").level == logging.WARNING


def test_unknown_level_falls_back_to_info():
    assert configure_logging("chatty") == logging.INFO
    assert logging.getLogger().level == logging.INFO


def test_log_file_is_created(tmp_path):
    log_file = tmp_path / "logs" / "planner.log"
    configure_logging("INFO", str(log_file))
    logging.getLogger("debt_planner.test").info("hello")
    for handler in logging.getLogger().handlers:
        handler.flush()
    assert "hello" in log_file.read_text(encoding="utf-8")
