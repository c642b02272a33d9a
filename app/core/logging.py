"""
Logging setup for the complaint desk.

Application code logs through the standard library via ``get_logger``;
access logs go through structlog. Both sinks share one console handler
and both are stamped with the current request id and caller id, which
the middleware and the auth dependency keep in context variables.
"""

import sys
import logging
from typing import Any, Dict, List, MutableMapping, Optional, Tuple
from datetime import datetime, timezone
from contextvars import ContextVar

import structlog
from pythonjsonlogger import jsonlogger

from app.config.settings import settings

SERVICE_NAME = 'complaint-desk'

request_id: ContextVar[Optional[str]] = ContextVar('request_id', default=None)
user_id: ContextVar[Optional[str]] = ContextVar('user_id', default=None)

REDACTED = '[REDACTED]'
SENSITIVE_KEYS = ('password', 'token', 'secret', 'authorization', 'cookie')

TEXT_FORMAT = '%(asctime)s %(levelname)s [%(name)s] [req=%(request_id)s] %(message)s'
JSON_FORMAT = '%(asctime)s %(name)s %(levelname)s %(message)s'

# (logger name, level) pairs applied after the root level.
QUIET_LOGGERS: Tuple[Tuple[str, int], ...] = (
    ('uvicorn.access', logging.WARNING),
    ('httpx', logging.WARNING),
    ('smtplib', logging.WARNING),
)


def _is_sensitive(key: str) -> bool:
    lowered = key.lower()
    return any(word in lowered for word in SENSITIVE_KEYS)


def redact(values: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """Mask credential-looking keys in place, descending into nested dicts."""
    for key, value in values.items():
        if _is_sensitive(key):
            values[key] = REDACTED
        elif isinstance(value, dict):
            redact(value)
    return values


class RequestContextFilter(logging.Filter):
    """Copy the request/caller context variables onto every stdlib record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id.get() or '-'
        record.user_id = user_id.get() or '-'
        return True


class ComplaintJsonFormatter(jsonlogger.JsonFormatter):
    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['service'] = SERVICE_NAME
        redact(log_record)


def _add_request_context(logger, method_name, event_dict):
    for key, var in (('request_id', request_id), ('user_id', user_id)):
        value = var.get()
        if value:
            event_dict.setdefault(key, value)
    event_dict['timestamp'] = datetime.now(timezone.utc).isoformat()
    event_dict['service'] = SERVICE_NAME
    event_dict['environment'] = settings.ENVIRONMENT
    return event_dict


def _redact_event(logger, method_name, event_dict):
    return redact(event_dict)


def _structlog_processors(log_format: str) -> List[Any]:
    processors: List[Any] = [
        structlog.stdlib.filter_by_level,
        _add_request_context,
        _redact_event,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.format_exc_info,
    ]
    if log_format == 'json':
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.processors.KeyValueRenderer(key_order=['event'], sort_keys=True))
    return processors


def _console_handler(level: int, log_format: str) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.addFilter(RequestContextFilter())
    if log_format == 'json':
        handler.setFormatter(ComplaintJsonFormatter(JSON_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    return handler


class LoggerAdapter(logging.LoggerAdapter):
    """
    Adapter carrying fixed context for one component.

    Per-call ``extra`` is merged over the bound context instead of
    replacing it.
    """

    def __init__(self, logger: logging.Logger, context: Optional[Dict[str, Any]] = None):
        super().__init__(logger, dict(context or {}))

    def process(self, msg, kwargs):
        kwargs['extra'] = {**self.extra, **(kwargs.get('extra') or {})}
        return msg, kwargs


def get_logger(name: Optional[str] = None, **context: Any) -> LoggerAdapter:
    return LoggerAdapter(logging.getLogger(name or 'app'), context)


_configured = False


def setup_logging(force: bool = False) -> None:
    """Install the console handler and structlog pipeline once per process."""
    global _configured
    if _configured and not force:
        return

    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(_console_handler(level, settings.LOG_FORMAT))

    for name, quiet_level in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)
    logging.getLogger('sqlalchemy.engine').setLevel(
        logging.INFO if settings.DB_ECHO else logging.WARNING
    )

    if settings.ENABLE_STRUCTURED_LOGGING:
        structlog.configure(
            processors=_structlog_processors(settings.LOG_FORMAT),
            wrapper_class=structlog.stdlib.BoundLogger,
            logger_factory=structlog.stdlib.LoggerFactory(),
            context_class=dict,
            cache_logger_on_first_use=True,
        )

    _configured = True
    get_logger(__name__).info(
        'Logging initialised',
        extra={'log_level': settings.LOG_LEVEL, 'log_format': settings.LOG_FORMAT},
    )


__all__ = [
    'get_logger',
    'setup_logging',
    'redact',
    'LoggerAdapter',
    'RequestContextFilter',
    'request_id',
    'user_id',
]
