"""
Logging configuration for PrivScore.
Structured console/file logging with a per-session (or per-request)
correlation ID, and an optional JSON format for the proxy deployment.
"""

import json
import logging
import os
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime
from typing import Optional

# Correlation ID for the current quiz session / proxy request
correlation_id: ContextVar[Optional[str]] = ContextVar('correlation_id', default=None)

_logging_configured = False

# Third-party loggers that are chatty at INFO
_NOISY_LOGGERS = ("urllib3", "httpx", "httpcore", "watchdog")


class CorrelationFilter(logging.Filter):
    """Add correlation ID to log records"""
    def filter(self, record):
        record.correlation_id = correlation_id.get() or 'N/A'
        return True


class StructuredFormatter(logging.Formatter):
    """[TIMESTAMP] [LEVEL] [CORRELATION_ID] [MODULE] MESSAGE"""
    def format(self, record):
        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        cid = getattr(record, "correlation_id", "N/A")
        line = f"[{timestamp}] [{record.levelname}] [{cid}] [{record.name}] {record.getMessage()}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""
    def format(self, record):
        payload = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(timespec="seconds"),
            "level": record.levelname,
            "correlation_id": getattr(record, "correlation_id", "N/A"),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    enable_json: bool = False
) -> None:
    """
    Configure application-wide logging. Only the first call has an effect.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        enable_json: Emit JSON lines instead of the bracketed text format
    """
    global _logging_configured

    if _logging_configured:
        return

    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    formatter = JsonFormatter() if enable_json else StructuredFormatter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(CorrelationFilter())
    root_logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(CorrelationFilter())
        root_logger.addHandler(file_handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    _logging_configured = True


def setup_logging_from_env() -> None:
    """Configure logging from LOG_LEVEL, LOG_FILE and LOG_JSON."""
    setup_logging(
        level=os.getenv("LOG_LEVEL", "INFO"),
        log_file=os.getenv("LOG_FILE") or None,
        enable_json=os.getenv("LOG_JSON", "false").lower() in ("1", "true", "yes"),
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with correlation ID support.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def set_correlation_id(cid: Optional[str] = None) -> str:
    """
    Set correlation ID for current context.
    Generates new ID if None provided.

    Args:
        cid: Optional correlation ID (generates new if None)

    Returns:
        Correlation ID string
    """
    if cid is None:
        cid = str(uuid.uuid4())
    correlation_id.set(cid)
    return cid


def get_correlation_id() -> Optional[str]:
    """Get current correlation ID"""
    return correlation_id.get()
