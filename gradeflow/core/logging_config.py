"""
Gradeflow - Centralized Logging Configuration
Plain text logs for development, JSON lines when LOG_FORMAT=json.
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict

from gradeflow.core.config import settings


# Acting user for the current request, stamped onto every record
user_id_var: ContextVar[str] = ContextVar('user_id', default='')


def get_user_id() -> str:
    """Get current acting user ID from context"""
    return user_id_var.get() or ''


def set_user_id(user_id: str) -> None:
    """Set acting user ID in context"""
    user_id_var.set(user_id)


_STANDARD_ATTRS = {
    'name', 'msg', 'args', 'created', 'filename', 'funcName', 'levelname',
    'levelno', 'lineno', 'module', 'msecs', 'pathname', 'process',
    'processName', 'relativeCreated', 'stack_info', 'exc_info', 'exc_text',
    'thread', 'threadName', 'message', 'taskName', 'user_id',
}


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging in production.
    Extra fields passed via `extra=` are copied onto the output object.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
        }

        user_id = get_user_id()
        if user_id:
            log_data["user_id"] = user_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS and not key.startswith('_'):
                log_data[key] = value

        return json.dumps(log_data, default=str)


class ContextualFormatter(logging.Formatter):
    """Readable formatter that includes the acting user id"""

    def format(self, record: logging.LogRecord) -> str:
        record.user_id = get_user_id() or '-'
        return super().format(record)


def setup_logging() -> logging.Logger:
    root_logger = logging.getLogger("gradeflow")
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL, logging.INFO))
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    if settings.LOG_FORMAT == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(ContextualFormatter(
            "%(asctime)s | %(levelname)-8s | user=%(user_id)s | %(name)s:%(lineno)d | %(message)s"
        ))
    root_logger.addHandler(handler)
    root_logger.propagate = False
    return root_logger


logger = setup_logging()


def get_logger(name: str) -> logging.Logger:
    """Child logger under the gradeflow namespace. Module `__name__`s already carry it."""
    if name == logger.name or name.startswith(logger.name + "."):
        return logging.getLogger(name)
    return logger.getChild(name)
