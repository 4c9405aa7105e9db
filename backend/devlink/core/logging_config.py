"""
DevLink - Logging

One "devlink" logger for the whole service. Request-scoped fields
(request id, user id, portfolio id) are bound once per request and stamped
onto every record by LogContextFilter, so formatters never reach into
context themselves.

    bind_log_context(request_id="3f2a91c0", portfolio_id=portfolio_id)
    logger.log_portfolio_event("published", portfolio_id, slug=slug)
    clear_log_context()

Production writes one JSON object per line; everything else writes
plain text with the bound fields in brackets.
"""

import json
import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

from devlink.core.config import settings


CONTEXT_FIELDS = ("request_id", "user_id", "portfolio_id")

_log_context: ContextVar[Dict[str, str]] = ContextVar("devlink_log_context", default={})

# LogRecord attributes that are not caller-supplied "extra" fields
_STANDARD_RECORD_KEYS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime", *CONTEXT_FIELDS}


def bind_log_context(**fields: Optional[str]) -> None:
    """Add fields to the current request's log context; None values are skipped"""
    context = dict(_log_context.get())
    context.update({key: str(value) for key, value in fields.items() if value})
    _log_context.set(context)


def clear_log_context() -> None:
    _log_context.set({})


def current_log_context() -> Dict[str, str]:
    return dict(_log_context.get())


def generate_request_id() -> str:
    """Short id for correlating one request's log lines"""
    return uuid.uuid4().hex[:8]


class LogContextFilter(logging.Filter):
    """Copy the bound context onto each record ('-' for unbound fields)"""

    def filter(self, record: logging.LogRecord) -> bool:
        context = _log_context.get()
        for field in CONTEXT_FIELDS:
            setattr(record, field, context.get(field, "-"))
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per record: context fields, extras, and exception type/traceback"""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        entry.update({
            field: getattr(record, field)
            for field in CONTEXT_FIELDS
            if getattr(record, field, "-") != "-"
        })
        entry.update({
            key: value for key, value in vars(record).items()
            if key not in _STANDARD_RECORD_KEYS and not key.startswith("_")
        })
        if record.exc_info and record.exc_info[0]:
            entry["exception"] = record.exc_info[0].__name__
            entry["traceback"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class DevLinkLogger(logging.Logger):
    """Logger with one helper per kind of event the service reports"""

    def log_request(self, method: str, path: str, status_code: int,
                    duration_ms: float, slow_ms: float = 1000, **fields) -> None:
        """One line per HTTP request; 5xx is ERROR, 4xx or slow is WARNING"""
        slow = duration_ms > slow_ms
        if status_code >= 500:
            level = logging.ERROR
        elif status_code >= 400 or slow:
            level = logging.WARNING
        else:
            level = logging.INFO
        self.log(
            level,
            f"{method} {path} -> {status_code} ({duration_ms:.2f}ms{', slow' if slow else ''})",
            extra={
                "event_type": "http_request",
                "http_method": method,
                "http_path": path,
                "http_status": status_code,
                "duration_ms": round(duration_ms, 2),
                "slow": slow,
                **fields
            }
        )

    def log_auth_event(self, event: str, success: bool, user_email: Optional[str] = None,
                       reason: Optional[str] = None, **fields) -> None:
        """register / login outcomes; failures at WARNING"""
        outcome = "ok" if success else f"rejected ({reason})" if reason else "rejected"
        self.log(
            logging.INFO if success else logging.WARNING,
            f"Auth {event} {outcome}" + (f" for {user_email}" if user_email else ""),
            extra={
                "event_type": "auth",
                "auth_event": event,
                "auth_success": success,
                "user_email": user_email,
                **fields
            }
        )

    def log_portfolio_event(self, event: str, portfolio_id: str, **fields) -> None:
        """Lifecycle of one portfolio: created, replaced, published, deleted, exported"""
        details = " ".join(f"{key}={value}" for key, value in fields.items())
        self.info(
            f"Portfolio {portfolio_id} {event}" + (f" {details}" if details else ""),
            extra={
                "event_type": "portfolio",
                "portfolio_event": event,
                "resource_id": portfolio_id,
                **fields
            }
        )

    def log_error_with_context(self, error: Exception, context: Optional[str] = None,
                               **fields) -> None:
        """Unexpected failure with its traceback; the cause never reaches the client"""
        self.error(
            f"{context or 'unhandled'} failed: {type(error).__name__}: {error}",
            exc_info=error,
            extra={
                "event_type": "error",
                "error_type": type(error).__name__,
                "error_context": context,
                **fields
            }
        )


def _handler(formatter: logging.Formatter, log_file: Optional[str] = None) -> logging.Handler:
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = RotatingFileHandler(log_file, maxBytes=10 * 1024 * 1024, backupCount=5)
        handler.setLevel(logging.DEBUG)
    else:
        handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    handler.addFilter(LogContextFilter())
    return handler


def setup_logging() -> DevLinkLogger:
    """(Re)build the "devlink" logger from settings"""
    logging.setLoggerClass(DevLinkLogger)
    logger = logging.getLogger("devlink")
    logger.__class__ = DevLinkLogger  # in case it was created before setLoggerClass
    logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    logger.propagate = False
    logger.handlers.clear()

    if settings.ENVIRONMENT == "production":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s | %(levelname)-8s | [%(request_id)s] [%(user_id)s] [%(portfolio_id)s] | %(message)s"
        )

    logger.addHandler(_handler(formatter))
    if settings.LOG_FILE:
        logger.addHandler(_handler(formatter, settings.LOG_FILE))

    for noisy in ("httpx", "httpcore", "uvicorn.access", "sqlalchemy.engine"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    return logger


logger: DevLinkLogger = setup_logging()


__all__ = [
    "logger",
    "setup_logging",
    "bind_log_context",
    "clear_log_context",
    "current_log_context",
    "generate_request_id",
    "DevLinkLogger",
    "JSONFormatter",
    "LogContextFilter",
]
