"""Logging configuration.

Configures loguru for CLI runs: human-readable coloured output on stderr by
default, or one JSON object per line when the host collects structured logs.
Standard library logging (httpx, google-auth) is routed into loguru.
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from typing import Any

from loguru import logger

_STDLIB_LOGGERS = ("httpx", "httpcore", "google.auth", "google_auth_oauthlib")


def _json_serializer(record: dict[str, Any]) -> str:
    """Serialize a log record to a flat JSON object.

    Fields: severity, message, time, plus everything bound via ``extra``.
    """
    log_entry: dict[str, Any] = {
        "severity": record["level"].name,
        "message": record["message"],
        "time": record["time"].isoformat(),
    }

    if record["exception"] is not None:
        exc_info = record["exception"]
        tb_str = None
        if exc_info.traceback:
            tb_str = "".join(
                traceback.format_exception(
                    exc_info.type, exc_info.value, exc_info.traceback
                )
            )
        log_entry["exception"] = {
            "type": exc_info.type.__name__ if exc_info.type else None,
            "value": str(exc_info.value) if exc_info.value else None,
            "traceback": tb_str,
        }

    for key, value in record.get("extra", {}).items():
        if not key.startswith("_"):
            log_entry[key] = value

    return json.dumps(log_entry, default=str)


def _json_sink(message: Any) -> None:
    """Sink that writes serialized JSON to stderr."""
    sys.stderr.write(_json_serializer(message.record) + "\n")
    sys.stderr.flush()


def configure_logging(*, level: str = "INFO", json_logs: bool = False) -> None:
    """Configure loguru for a run.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_logs: If True, emit JSON lines instead of coloured text.
    """
    logger.remove()

    if json_logs:
        logger.add(
            _json_sink,
            level=level,
            format="{message}",
            backtrace=False,
            diagnose=False,
        )
    else:
        logger.add(
            sys.stderr,
            level=level,
            format=(
                "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan> | "
                "<level>{message}</level>"
            ),
            colorize=True,
        )

    _intercept_standard_logging(level)


class InterceptHandler(logging.Handler):
    """Forward standard library log records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _intercept_standard_logging(level: str) -> None:
    """Route library loggers through loguru."""
    # loguru knows TRACE, the stdlib does not
    stdlib_level = "DEBUG" if level == "TRACE" else level
    logging.basicConfig(handlers=[InterceptHandler()], level=stdlib_level, force=True)
    for name in _STDLIB_LOGGERS:
        logging.getLogger(name).setLevel(stdlib_level)
        logging.getLogger(name).handlers = [InterceptHandler()]
        logging.getLogger(name).propagate = False
