from __future__ import annotations

import logging

import pytest

from sqlident.logger import TRACE, apply_session_settings, logger, setup_logger


@pytest.fixture
def restore_level():
    level = logger.level
    yield
    logger.setLevel(level)


def test_setup_logger_is_idempotent():
    handlers = list(logger.handlers)
    assert setup_logger("sqlident") is logger
    assert logger.handlers == handlers
    stdout_handler, stderr_handler = logger._app_handlers
    assert stdout_handler.level == logging.NOTSET
    assert stderr_handler.level == logging.ERROR
    assert {stdout_handler, stderr_handler} <= set(handlers)
    assert logging.getLevelName(TRACE) == "TRACE"


def test_error_raise_with_class():
    with pytest.raises(ValueError, match="bad option"):
        logger.error_raise("bad option", exc=ValueError)


def test_error_raise_default():
    with pytest.raises(RuntimeError):
        logger.error_raise("boom")


def test_session_settings_adjust_level(restore_level):
    apply_session_settings(logger, verbose=True, silent=False, color=False)
    assert logger.level == logging.DEBUG
    apply_session_settings(logger, verbose=True, silent=True, color=True)
    assert logger.level == logging.ERROR


def test_session_settings_restore_default_level(restore_level, monkeypatch):
    monkeypatch.setenv("SQLIDENT_LOG_LEVEL", "WARNING")
    apply_session_settings(logger, verbose=True, silent=False, color=False)
    assert logger.level == logging.DEBUG
    apply_session_settings(logger, verbose=False, silent=False, color=False)
    assert logger.level == logging.WARNING


def test_session_settings_leave_foreign_handlers_alone(restore_level):
    foreign = logging.NullHandler()
    formatter = logging.Formatter("%(message)s")
    foreign.setFormatter(formatter)
    logger.addHandler(foreign)
    try:
        apply_session_settings(logger, verbose=False, silent=False, color=True)
        assert foreign.formatter is formatter
    finally:
        logger.removeHandler(foreign)
