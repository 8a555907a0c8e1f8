"""Structured logging for the storefront.

stdlib logging owns the handlers (console plus rotating files under
``logs/``); structlog renders events as JSON in production and staging and
as Rich-formatted console output everywhere else.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

# Event keys whose values must never reach a log line
SECRET_KEYS = frozenset({"password", "confirm_password", "password_hash", "token", "authorization"})

_LEVELS = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

_MAX_LOG_BYTES = 10 * 1024 * 1024


def _environment() -> str:
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def get_log_level() -> str:
    """``LOG_LEVEL`` if set, else the default for the current environment."""
    return os.getenv("LOG_LEVEL", _LEVELS.get(_environment(), "INFO"))


def _rotating_handler(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=_MAX_LOG_BYTES,
        backupCount=5,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def setup_stdlib_logging(level: str | None = None, log_dir: str = "logs", log_file_prefix: str = "storefront") -> None:
    log_level = level or get_log_level()
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(log_level)

    root = logging.getLogger()
    root.setLevel(log_level)
    root.handlers = [
        console,
        _rotating_handler(log_path / f"{log_file_prefix}.log", log_level),
        _rotating_handler(log_path / f"{log_file_prefix}_error.log", logging.ERROR),
    ]

    for noisy, noisy_level in (
        ("urllib3", logging.WARNING),
        ("asyncio", logging.WARNING),
        ("multipart", logging.WARNING),
        ("passlib", logging.ERROR),
        ("protean", logging.WARNING),
    ):
        logging.getLogger(noisy).setLevel(noisy_level)


def redact_secrets(_logger, _method_name, event_dict: dict) -> dict:
    """structlog processor that masks credentials passed as event keys."""
    for key in SECRET_KEYS.intersection(event_dict):
        event_dict[key] = "***"
    return event_dict


def setup_structlog() -> None:
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        redact_secrets,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.MODULE,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ),
    ]

    if _environment() in ("production", "staging"):
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=4),
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(level: str | None = None, log_dir: str = "logs", log_file_prefix: str = "storefront") -> None:
    setup_stdlib_logging(level=level, log_dir=log_dir, log_file_prefix=log_file_prefix)
    setup_structlog()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    """Bind values (request id, path, user) to every log line of the current context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
