# 📄 File: app/shared/utils/logging.py

# 🧭 Purpose (Layman Explanation):
# Sets up a logging system that records what happens in the platform in a structured way,
# so we can trace a single request (an enrollment, a login) across every component it touched.

# 🧪 Purpose (Technical Summary):
# Structured logging with python-json-logger, request/user context propagated through
# contextvars, a text fallback format, and a StructuredLogger facade for audit events.

# 🔗 Dependencies:
# - python-json-logger: JSON log formatting
# - logging: Python standard logging
# - contextvars: Request context tracking

# 🔄 Connected Modules / Calls From:
# Used by: app.main (setup_logging), request logging middleware (log_context),
# audit event handler (log_business_event), celery tasks

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional
from uuid import uuid4

from pythonjsonlogger.json import JsonFormatter

from app.shared.config.settings import get_settings

# Context variables for request tracking
request_id_var: ContextVar[str] = ContextVar('request_id', default='')
user_id_var: ContextVar[str] = ContextVar('user_id', default='')

SERVICE_NAME = 'lms-api'

_logging_configured = False
_loggers_cache: Dict[str, "StructuredLogger"] = {}


def _apply_context(record: logging.LogRecord) -> None:
    record.request_id = request_id_var.get('')
    record.user_id = user_id_var.get('')
    record.service = SERVICE_NAME


class ContextualFormatter(logging.Formatter):
    """
    Plain-text formatter that adds request ID and user ID
    to every log message for traceability.
    """

    def format(self, record):
        _apply_context(record)
        record.timestamp = datetime.now(timezone.utc).isoformat()
        return super().format(record)


class JSONFormatter(JsonFormatter):
    """
    JSON formatter for structured logging.

    Outputs one JSON object per line with the request context and any
    extra fields passed through StructuredLogger flattened at top level.
    """

    def __init__(self):
        super().__init__('%(levelname)s %(name)s %(message)s')

    def add_fields(self, log_data: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        _apply_context(record)
        super().add_fields(log_data, record, message_dict)

        log_data['timestamp'] = datetime.now(timezone.utc).isoformat()
        log_data['level'] = log_data.pop('levelname', record.levelname)
        log_data['logger'] = log_data.pop('name', record.name)

        extra_fields = log_data.pop('extra_fields', None)
        if extra_fields:
            log_data.update(extra_fields)

        if not log_data.get('request_id'):
            log_data.pop('request_id', None)
        if not log_data.get('user_id'):
            log_data.pop('user_id', None)


class StructuredLogger:
    """
    Logger facade with structured logging helpers.

    Provides methods for logging user actions and business events
    with consistent structure and contextual information.
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def debug(self, message: str, extra: Optional[Dict] = None):
        self._log(logging.DEBUG, message, extra)

    def info(self, message: str, extra: Optional[Dict] = None):
        self._log(logging.INFO, message, extra)

    def warning(self, message: str, extra: Optional[Dict] = None):
        self._log(logging.WARNING, message, extra)

    def error(self, message: str, extra: Optional[Dict] = None, exc_info: bool = False):
        self._log(logging.ERROR, message, extra, exc_info=exc_info)

    def _log(self, level: int, message: str, extra: Optional[Dict] = None, exc_info: bool = False):
        kwargs: Dict[str, Any] = {'exc_info': exc_info}
        if extra:
            kwargs['extra'] = {'extra_fields': dict(extra)}
        self.logger.log(level, message, **kwargs)

    def log_user_action(
        self,
        action: str,
        user_id: str,
        resource: Optional[str] = None,
        result: str = 'success',
        extra: Optional[Dict] = None
    ):
        """Log user action for audit trail."""
        extra_fields = {
            'event_type': 'user_action',
            'action': action,
            'actor_id': user_id,
            'result': result,
            **(extra or {})
        }

        if resource:
            extra_fields['resource'] = resource

        self.info(
            f"User {user_id} performed {action}" +
            (f" on {resource}" if resource else ""),
            extra=extra_fields
        )

    def log_business_event(
        self,
        event_type: str,
        description: str,
        entity_id: Optional[str] = None,
        entity_type: Optional[str] = None,
        extra: Optional[Dict] = None
    ):
        """Log business events for analytics and audit."""
        extra_fields = {
            'event_type': 'business_event',
            'business_event_type': event_type,
            'description': description,
            **(extra or {})
        }

        if entity_id:
            extra_fields['entity_id'] = entity_id
        if entity_type:
            extra_fields['entity_type'] = entity_type

        self.info(description, extra=extra_fields)


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    log_file: Optional[str] = None,
    enable_console: bool = True
) -> logging.Logger:
    """
    Setup application logging configuration.

    Args:
        log_level: Override for settings.LOG_LEVEL
        log_format: 'json' or 'text' (defaults to settings.LOG_FORMAT)
        log_file: Optional file path receiving the same records
        enable_console: Attach a stdout handler

    Returns:
        The "startup" logger
    """
    global _logging_configured

    if _logging_configured:
        return logging.getLogger("startup")

    settings = get_settings()
    log_level = log_level or settings.LOG_LEVEL
    log_format = log_format or settings.LOG_FORMAT
    log_file = log_file or settings.LOG_FILE

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    if log_format.lower() == 'json':
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = ContextualFormatter(
            '%(timestamp)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s'
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    logging.getLogger('aiohttp').setLevel(logging.WARNING)
    logging.getLogger('asyncio').setLevel(logging.WARNING)
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)

    _logging_configured = True
    return logging.getLogger("startup")


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        StructuredLogger instance
    """
    if name not in _loggers_cache:
        _loggers_cache[name] = StructuredLogger(name)
    return _loggers_cache[name]


@contextmanager
def log_context(request_id: Optional[str] = None, user_id: Optional[str] = None):
    """
    Context manager binding request and user identifiers to every log line.

    Args:
        request_id: Request identifier (generated when omitted)
        user_id: Authenticated user identifier
    """
    if request_id is None:
        request_id = str(uuid4())

    request_token = request_id_var.set(request_id)
    user_token = user_id_var.set(user_id or '')

    try:
        yield {'request_id': request_id, 'user_id': user_id}
    finally:
        request_id_var.reset(request_token)
        user_id_var.reset(user_token)
