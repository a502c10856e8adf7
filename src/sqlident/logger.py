from __future__ import annotations

import logging
import os
import sys
from typing import NoReturn, Optional, Union

import colorlog
from dotenv import load_dotenv

load_dotenv()

TRACE = 5
_LEVELS = {
    "TRACE": TRACE,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}
_BASE_FORMAT = "[%(levelname)s] %(asctime)s - %(classname)s:%(lineno)d %(funcname)s(): %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class AppLogger(logging.Logger):
    def error_raise(
        self,
        message: str,
        *,
        exc: Optional[Union[BaseException, type[BaseException]]] = None,
    ) -> NoReturn:
        """
        Log ``message`` at ERROR and raise. ``exc`` may be an exception class
        (instantiated with the message) or instance; defaults to RuntimeError.
        """
        self.error(message)
        if exc is None:
            raise RuntimeError(message)
        if isinstance(exc, type):
            raise exc(message)
        raise exc

    def trace(self, message: str, *args, **kwargs) -> None:
        if self.isEnabledFor(TRACE):
            self._log(TRACE, message, args, **kwargs)


class ContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover - trivial
        record.classname = record.module
        record.funcname = record.funcName
        return True


def _determine_level() -> int:
    raw_level = (os.getenv("SQLIDENT_LOG_LEVEL") or os.getenv("LOG_LEVEL") or "").upper()
    return _LEVELS.get(raw_level, logging.INFO)


def _build_formatter(color: bool) -> logging.Formatter:
    if not color:
        return logging.Formatter(fmt=_BASE_FORMAT, datefmt=_DATE_FORMAT)
    return colorlog.ColoredFormatter(
        fmt="%(log_color)s" + _BASE_FORMAT,
        datefmt=_DATE_FORMAT,
        log_colors={
            "TRACE": "white",
            "DEBUG": "cyan",
            "INFO": "green",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "bold_red",
        },
    )


def setup_logger(name: str) -> AppLogger:
    logging.addLevelName(TRACE, "TRACE")
    logging.setLoggerClass(AppLogger)
    logger = logging.getLogger(name)
    if getattr(logger, "_logger_initialized", False):  # type: ignore[attr-defined]
        return logger  # type: ignore[return-value]

    logger.setLevel(_determine_level())
    logger.propagate = False

    formatter = _build_formatter(color=sys.stderr.isatty())

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(logging.NOTSET)
    stdout_handler.addFilter(lambda record: record.levelno < logging.ERROR)
    stdout_handler.setFormatter(formatter)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.ERROR)
    stderr_handler.setFormatter(formatter)

    logger.addHandler(stdout_handler)
    logger.addHandler(stderr_handler)
    logger.addFilter(ContextFilter())
    logger._app_handlers = (stdout_handler, stderr_handler)  # type: ignore[attr-defined]
    logger._logger_initialized = True  # type: ignore[attr-defined]
    return logger  # type: ignore[return-value]


def apply_session_settings(
    target: logging.Logger, *, verbose: bool, silent: bool, color: bool
) -> None:
    """Follow the shell's ``verbose``/``silent``/``color`` options."""
    if silent:
        target.setLevel(logging.ERROR)
    elif verbose:
        target.setLevel(logging.DEBUG)
    else:
        target.setLevel(_determine_level())
    formatter = _build_formatter(color)
    for handler in getattr(target, "_app_handlers", ()):
        handler.setFormatter(formatter)


logger: AppLogger = setup_logger("sqlident")

__all__ = ["logger", "setup_logger", "apply_session_settings", "AppLogger", "TRACE"]
