"""Logging configuration for the CafeHub domain.

Standard library handlers carry the output: console always, plus rotating
files unless `LOG_TO_FILE` is switched off. structlog shapes every record
on top of them, rendering JSON in production/staging and a readable console
format everywhere else.

Environment:
    LOG_LEVEL         explicit level, overrides the per-environment default
    LOG_DIR           directory for the rotating files (default: logs)
    LOG_TO_FILE       "0"/"false" disables the rotating files
    LOG_MAX_BYTES     size at which a file rotates (default: 10 MiB)
    LOG_BACKUP_COUNT  rotated files kept (default: 5)
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

DOMAIN_NAME = "cafehub"

_LEVELS_BY_ENVIRONMENT = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}
_STRUCTURED_ENVIRONMENTS = ("production", "staging")

# Third-party loggers that are noisy below WARNING
_QUIET_LOGGERS = ("uvicorn.access", "asyncio", "sqlalchemy.engine", "redis")


def _environment() -> str:
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def _flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() not in ("0", "false", "no", "off")


def get_log_level() -> str:
    """Log level for the current environment, unless LOG_LEVEL overrides it."""
    return os.getenv("LOG_LEVEL", _LEVELS_BY_ENVIRONMENT.get(_environment(), "INFO")).upper()


def _rotating_file(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=int(os.getenv("LOG_MAX_BYTES", str(10 * 1024 * 1024))),
        backupCount=int(os.getenv("LOG_BACKUP_COUNT", "5")),
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def _handlers(log_level: str) -> list[logging.Handler]:
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(log_level)
    handlers = [console]

    if _flag("LOG_TO_FILE", default=True):
        log_dir = Path(os.getenv("LOG_DIR", "logs"))
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(_rotating_file(log_dir / f"{DOMAIN_NAME}.log", log_level))
        handlers.append(_rotating_file(log_dir / f"{DOMAIN_NAME}_error.log", logging.ERROR))

    return handlers


def setup_stdlib_logging() -> None:
    """Route the root logger to the console and rotating files."""
    log_level = get_log_level()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = _handlers(log_level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _tag_domain(logger: Any, method_name: str, event_dict: dict) -> dict:
    event_dict.setdefault("domain", DOMAIN_NAME)
    return event_dict


def _renderer():
    if _environment() in _STRUCTURED_ENVIRONMENTS:
        return structlog.processors.JSONRenderer()

    return structlog.dev.ConsoleRenderer(
        colors=sys.stdout.isatty(),
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=2),
    )


def setup_structlog() -> None:
    """Configure structlog on top of the standard library loggers."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.contextvars.merge_contextvars,
            _tag_domain,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.MODULE,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            ),
            _renderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging() -> None:
    setup_stdlib_logging()
    setup_structlog()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    """Bind request-scoped values (caller, route) to every following log line."""
    structlog.contextvars.bind_contextvars(**{k: v for k, v in kwargs.items() if v is not None})


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
