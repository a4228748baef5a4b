"""Structured logging setup using structlog.

One processor chain feeds either a coloured ConsoleRenderer (development)
or a JSONRenderer (``APP_ENV=production`` or ``json_output=True``).
Standard-library ``logging`` output from uvicorn, httpx and openai goes
through the same formatter, and those libraries are held at WARNING unless
the service itself runs at DEBUG.

Request-scoped fields (``request_id``, ``user_id``) are bound with
:func:`bind_request_context` and appear on every event logged while the
request is being served.  Credential-looking fields are masked before
rendering so bearer tokens and API keys never reach the log sink.
"""

import logging
import os
import sys
from typing import Any

import structlog

_REDACTED = "***"
_SECRET_FIELDS = frozenset(
    {"authorization", "token", "access_token", "api_key", "apikey", "password"}
)
_NOISY_LOGGERS = ("httpx", "httpcore", "openai", "aiosqlite")


def redact_secrets(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """structlog processor: mask values of credential-looking keys."""
    for key in event_dict:
        if key.lower() in _SECRET_FIELDS and event_dict[key]:
            event_dict[key] = _REDACTED
    return event_dict


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
        redact_secrets,
    ]


def _renderer(use_json: bool) -> structlog.types.Processor:
    if use_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def configure_logging(log_level: str = "INFO", json_output: bool = False) -> structlog.BoundLogger:
    """Configure structlog and the stdlib root logger.

    Args:
        log_level: Level name (DEBUG, INFO, WARNING, ERROR).
        json_output: Force JSON.  Without it JSON is still chosen when
                     ``APP_ENV`` is ``production``.

    Returns:
        A configured structlog BoundLogger.
    """
    level = log_level.upper()
    use_json = json_output or os.environ.get("APP_ENV", "development") == "production"
    shared = _shared_processors()
    renderer = _renderer(use_json)

    structlog.configure(
        processors=[*shared, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *shared,
                renderer,
            ],
        )
    )
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    library_level = level if level == "DEBUG" else "WARNING"
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)

    return structlog.get_logger()


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a named structlog logger, configuring defaults on first use."""
    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(logger_name=name)


def bind_request_context(**fields: object) -> None:
    """Bind request-scoped fields (e.g. ``user_id``) to all later log events."""
    structlog.contextvars.bind_contextvars(**fields)


def clear_request_context() -> None:
    """Drop every request-scoped field bound with :func:`bind_request_context`."""
    structlog.contextvars.clear_contextvars()
