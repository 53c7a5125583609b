"""
Logging setup and the logger adapter used across the service.

Standard logging is configured from the dictConfig in
``app.config.logging``. When ENABLE_STRUCTURED_LOGGING is set, structlog
is configured on top of it with the current request ID bound to every
event.
"""

import logging
import logging.config
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import structlog

from app.config.logging import build_logging_config
from app.config.settings import settings

# Set per request by RequestIDMiddleware
request_id: ContextVar[Optional[str]] = ContextVar('request_id', default=None)


def add_request_context(logger, method_name, event_dict):
    """structlog processor: request ID, timestamp and environment."""
    req_id = request_id.get()
    if req_id:
        event_dict['request_id'] = req_id
    event_dict['timestamp'] = datetime.now(timezone.utc).isoformat()
    event_dict['environment'] = settings.ENVIRONMENT
    return event_dict


def configure_structured_logging() -> None:
    processors = [
        add_request_context,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
        if settings.LOG_FORMAT == "json"
        else structlog.processors.KeyValueRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


class LoggerAdapter:
    """
    Wraps a stdlib logger, merging bound context and the request ID into
    each record's ``extra``.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self._context: Dict[str, Any] = {}

    @property
    def name(self) -> str:
        return self.logger.name

    def add_context(self, **kwargs) -> "LoggerAdapter":
        self._context.update(kwargs)
        return self

    def _log(self, level: int, message: str, *args, **kwargs):
        extra = dict(kwargs.get('extra') or {})
        extra.update(self._context)
        req_id = request_id.get()
        if req_id and 'request_id' not in extra:
            extra['request_id'] = req_id
        kwargs['extra'] = extra
        # report the caller of debug()/info()/..., not this adapter
        kwargs.setdefault('stacklevel', 3)

        self.logger.log(level, message, *args, **kwargs)

    def debug(self, message: str, *args, **kwargs):
        self._log(logging.DEBUG, message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs):
        self._log(logging.INFO, message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs):
        self._log(logging.WARNING, message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs):
        self._log(logging.ERROR, message, *args, **kwargs)


def get_logger(name: str) -> LoggerAdapter:
    return LoggerAdapter(logging.getLogger(name))


def setup_logging() -> None:
    """Configure application logging"""
    logging.config.dictConfig(build_logging_config(settings))

    if settings.ENABLE_STRUCTURED_LOGGING:
        configure_structured_logging()

    get_logger("app").info(
        "Logging initialized",
        extra={'log_level': settings.LOG_LEVEL, 'log_format': settings.LOG_FORMAT},
    )


__all__ = [
    'request_id',
    'LoggerAdapter',
    'configure_structured_logging',
    'get_logger',
    'setup_logging',
]
