# tests/utils/test_logging_config.py
"""Unit tests for logging configuration utility.
=================================================

Tests for the logging setup utility in `tedit.utils.logging_config`.

This module verifies that `setup_logging`:
- Creates rotating file handlers for the main log and a separate error log
  when `separate_error_log` is enabled.
- Honors the configured levels for each handler.
- Keeps the console quiet unless `log_to_console` is set.
- Routes key events to keytrace.log only when TEDIT_KEYTRACE is truthy.

Every test runs in a temporary working directory to avoid touching real files,
and the root logger is restored afterwards.
"""

import logging
import logging.handlers

import pytest

from tedit.utils import logging_config


@pytest.fixture(autouse=True)
def restore_logging(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(logging_config.KEYTRACE_ENV_VAR, raising=False)
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    key_logger = logging_config.KEY_LOGGER
    saved_key = (key_logger.handlers[:], key_logger.propagate, key_logger.disabled)
    yield
    for handler in root.handlers + key_logger.handlers:
        if handler not in saved_handlers and handler not in saved_key[0]:
            handler.close()
    root.handlers, root.level = saved_handlers, saved_level
    key_logger.handlers, key_logger.propagate, key_logger.disabled = saved_key


def test_setup_logging_creates_handlers(tmp_path) -> None:
    """`setup_logging` should add rotating file handlers with proper levels.

    Scenario:
    - Console logging is disabled.
    - Separate error log is requested.
    - File handler level is INFO.
    - Error file handler level is ERROR.
    """
    logging_config.setup_logging(
        {
            "logging": {
                "file_level": "INFO",
                "console_level": "ERROR",
                "log_to_console": False,
                "separate_error_log": True,
            }
        }
    )

    root = logging.getLogger()
    assert all(isinstance(h, logging.handlers.RotatingFileHandler) for h in root.handlers)
    assert len(root.handlers) == 2
    assert root.handlers[0].level == logging.INFO
    assert root.handlers[1].level == logging.ERROR
    assert (tmp_path / "editor.log").exists()
    assert (tmp_path / "error.log").exists()


def test_console_handler_is_opt_in() -> None:
    logging_config.setup_logging({"logging": {"log_to_console": True, "console_level": "ERROR"}})
    root = logging.getLogger()
    consoles = [h for h in root.handlers if type(h) is logging.StreamHandler]
    assert len(consoles) == 1
    assert consoles[0].level == logging.ERROR


def test_repeated_setup_does_not_duplicate_handlers() -> None:
    logging_config.setup_logging({})
    logging_config.setup_logging({})
    assert len(logging.getLogger().handlers) == 1


def test_custom_log_file_location(tmp_path) -> None:
    target = tmp_path / "logs" / "tedit.log"
    logging_config.setup_logging({"logging": {"log_file": str(target)}})
    assert target.exists()


def test_keytrace_disabled_by_default(tmp_path) -> None:
    logging_config.setup_logging({})
    assert logging_config.KEY_LOGGER.disabled
    assert logging_config.KEY_LOGGER.propagate is False
    assert not (tmp_path / "keytrace.log").exists()


def test_keytrace_enabled_by_environment(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv(logging_config.KEYTRACE_ENV_VAR, "1")
    logging_config.setup_logging({})
    assert not logging_config.KEY_LOGGER.disabled
    logging_config.KEY_LOGGER.debug("key=%r", "a")
    for handler in logging_config.KEY_LOGGER.handlers:
        handler.flush()
    assert "key='a'" in (tmp_path / "keytrace.log").read_text(encoding="utf-8")
