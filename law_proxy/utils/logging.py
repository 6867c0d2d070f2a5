"""Structured logging configuration for the law search proxy."""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# Request id of the request being served by the current task.
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

_CONTEXT_FIELDS = (
    "request_id",
    "endpoint",
    "method",
    "status_code",
    "duration_ms",
    "client_ip",
    "user_agent",
    "error",
    "code",
    "target",
    "upstream_status",
    "body_length",
    "format",
)


class RequestContextFilter(logging.Filter):
    """Stamp every record with the current request id."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            request_id = request_id_var.get()
            if request_id:
                record.request_id = request_id
        return True


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for field in _CONTEXT_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class StructuredLogger:
    """Wrapper for structured logging with request context."""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def _log_with_context(
        self,
        level: int,
        message: str,
        *args,
        extra: Optional[Dict[str, Any]] = None,
        **kwargs
    ) -> None:
        """Log with request context."""
        log_extra = dict(extra or {})
        request_id = request_id_var.get()
        if request_id:
            log_extra.setdefault("request_id", request_id)
        self.logger.log(level, message, *args, extra=log_extra, **kwargs)

    def debug(self, message: str, *args, **kwargs) -> None:
        extra = kwargs.pop("extra", {})
        self._log_with_context(logging.DEBUG, message, *args, extra=extra, **kwargs)

    def info(self, message: str, *args, **kwargs) -> None:
        extra = kwargs.pop("extra", {})
        self._log_with_context(logging.INFO, message, *args, extra=extra, **kwargs)

    def warning(self, message: str, *args, **kwargs) -> None:
        extra = kwargs.pop("extra", {})
        self._log_with_context(logging.WARNING, message, *args, extra=extra, **kwargs)

    def error(self, message: str, *args, **kwargs) -> None:
        extra = kwargs.pop("extra", {})
        self._log_with_context(logging.ERROR, message, *args, extra=extra, **kwargs)

    def log(self, level: int, message: str, *args, **kwargs) -> None:
        """Log message at specified level."""
        extra = kwargs.pop("extra", {})
        self._log_with_context(level, message, *args, extra=extra, **kwargs)

    def exception(self, message: str, *args, **kwargs) -> None:
        """Log exception with traceback."""
        kwargs.setdefault("exc_info", True)
        self.error(message, *args, **kwargs)


def setup_logging(
    level: str = "INFO",
    json_format: bool = True,
    log_file: Optional[str] = None
) -> None:
    """
    Set up structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: Use JSON formatting (True) or plain text (False)
        log_file: Optional file path to write logs to
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(log_level)

    if json_format:
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

    context_filter = RequestContextFilter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(context_filter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(context_filter)
        root_logger.addHandler(file_handler)

    # Set levels for third-party loggers
    logging.getLogger("uvicorn").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger instance."""
    return StructuredLogger(name)
