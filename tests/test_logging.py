"""Tests for structured logging functionality."""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys

import pytest

from dealercosts.config import BaseConfig
from dealercosts.logging_config import JSONFormatter, get_logger, setup_logging


@pytest.fixture
def config(tmp_path, monkeypatch):
    monkeypatch.setenv("DEALERCOSTS_DATA_DIR", str(tmp_path))
    return BaseConfig()


@pytest.fixture(autouse=True)
def reset_handlers():
    yield
    logger = logging.getLogger("dealercosts")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


def _record(**kwargs) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test.logger",
        level=kwargs.pop("level", logging.INFO),
        pathname="test.py",
        lineno=42,
        msg=kwargs.pop("msg", "Test message"),
        args=(),
        exc_info=kwargs.pop("exc_info", None),
    )
    record.module = "test_module"
    record.funcName = "test_function"
    for key, value in kwargs.items():
        setattr(record, key, value)
    return record


def test_json_formatter():
    """JSONFormatter emits the standard keys."""
    log_data = json.loads(JSONFormatter().format(_record()))

    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "test.logger"
    assert log_data["message"] == "Test message"
    assert log_data["module"] == "test_module"
    assert log_data["function"] == "test_function"
    assert log_data["line"] == 42
    assert "timestamp" in log_data
    assert "extra" not in log_data


def test_json_formatter_with_exception():
    """JSONFormatter serializes exception details."""
    try:
        raise ValueError("Test error")
    except ValueError:
        exc_info = sys.exc_info()

    log_data = json.loads(JSONFormatter().format(_record(level=logging.ERROR, exc_info=exc_info)))

    assert log_data["exception"]["type"] == "ValueError"
    assert "Test error" in log_data["exception"]["message"]
    assert log_data["exception"]["traceback"] is not None


def test_json_formatter_includes_extras():
    log_data = json.loads(JSONFormatter().format(_record(cost_id=7, dealer_id="d1")))

    assert log_data["extra"] == {"cost_id": 7, "dealer_id": "d1"}


def test_setup_logging(config, tmp_path):
    """Logging setup creates a JSON log file under the data directory."""
    logger = setup_logging(config)

    assert logger.name == "dealercosts"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2  # Console + File

    log_file = tmp_path / "logs" / "dealercosts.log"
    assert log_file.exists()

    logger.warning("Test warning message")
    for handler in logger.handlers:
        handler.flush()

    lines = [line for line in log_file.read_text(encoding="utf-8").splitlines() if line.strip()]
    assert len(lines) >= 2  # startup message + warning
    entries = [json.loads(line) for line in lines]
    assert entries[0]["message"] == "Logging initialized"
    assert entries[-1]["message"] == "Test warning message"


def test_setup_logging_is_idempotent(config):
    setup_logging(config)
    logger = setup_logging(config)

    assert len(logger.handlers) == 2


def test_get_logger():
    """get_logger returns loggers namespaced under dealercosts."""
    logger1 = get_logger("module1")
    logger2 = get_logger("dealercosts.services.projections")

    assert logger1.name == "dealercosts.module1"
    assert logger2.name == "dealercosts.services.projections"
    assert logger1 != logger2


@pytest.mark.parametrize("dev_mode", [True, False])
def test_logging_levels_by_mode(config, dev_mode):
    """Console logging level adjusts based on dev mode."""
    config.DEV_MODE = dev_mode

    logger = setup_logging(config)

    console_handler = next(
        handler
        for handler in logger.handlers
        if isinstance(handler, logging.StreamHandler)
        and not isinstance(handler, logging.handlers.RotatingFileHandler)
    )
    assert console_handler.level == (logging.INFO if dev_mode else logging.WARNING)
    assert logger.level == (logging.DEBUG if dev_mode else logging.INFO)
