"""
Structured Logging Utilities

Provides utilities for adding structured context to log messages,
improving observability and debugging, plus the process-wide logging setup.
"""

import inspect
import logging
import sys
from contextvars import ContextVar
from functools import wraps
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

from config.app_config import get_log_dir, get_log_level


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Context variable for operation-scoped logging context
_logging_context: ContextVar[Dict[str, Any]] = ContextVar('logging_context', default={})

# Identifiers lifted from keyword arguments by log_operation
_CONTEXT_KEYS = ("unit_code", "phone_number", "payment_id", "contract_id")


def configure_logging(log_dir: Optional[Path] = None, level: Optional[int] = None) -> Path:
    """
    Install rotating file and console handlers on the root logger.

    Safe to call more than once: handlers installed by a previous call are
    replaced rather than duplicated.

    Args:
        log_dir: Directory for ``rental-core.log`` (defaults to RENTAL_LOG_DIR)
        level: Log level (defaults to RENTAL_LOG_LEVEL)

    Returns:
        Path of the active log file
    """
    log_dir = log_dir or get_log_dir()
    level = level if level is not None else get_log_level()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "rental-core.log"

    log_formatter = logging.Formatter(LOG_FORMAT)

    # File handler with rotation (10MB per file, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setFormatter(log_formatter)
    file_handler.setLevel(level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    console_handler.setLevel(level)

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if getattr(handler, "_rental_core", False):
            root_logger.removeHandler(handler)
            handler.close()
    for handler in (file_handler, console_handler):
        handler._rental_core = True
        root_logger.addHandler(handler)
    root_logger.setLevel(level)

    logging.getLogger(__name__).info(f"Logging initialized: {log_file}")
    return log_file


class StructuredLogger:
    """
    Wrapper around standard logger that adds structured context.

    Usage:
        logger = StructuredLogger(__name__)
        logger.info("Apartment details aggregated", extra={
            "unit_code": apartment.unit_code,
            "operation": "aggregate_apartment_details",
        })
    """

    def __init__(self, name: str):
        """
        Initialize structured logger.

        Args:
            name: Logger name (typically __name__)
        """
        self.logger = logging.getLogger(name)

    def _add_context(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Merge the ContextVar context with the per-call extra dict."""
        context = _logging_context.get().copy()
        if extra:
            context.update(extra)
        return context

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log debug message with structured context."""
        self.logger.debug(message, extra=self._add_context(extra))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log info message with structured context."""
        self.logger.info(message, extra=self._add_context(extra))

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log warning message with structured context."""
        self.logger.warning(message, extra=self._add_context(extra))

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None, exc_info: bool = False):
        """Log error message with structured context."""
        self.logger.error(message, extra=self._add_context(extra), exc_info=exc_info)


def set_logging_context(**kwargs):
    """
    Set logging context for the current operation.

    This context will be automatically included in all StructuredLogger
    messages within the current context.

    Example:
        set_logging_context(request_id="abc-123", unit_code="APT001")
    """
    context = _logging_context.get().copy()
    context.update(kwargs)
    _logging_context.set(context)


def clear_logging_context():
    """Clear the logging context."""
    _logging_context.set({})


def log_operation(operation_name: str):
    """
    Decorator to automatically log operation start/end with structured context.

    Args:
        operation_name: Name of the operation

    Example:
        @log_operation("load_apartment_details")
        async def load_apartment_details(self, unit_code: str):
            ...
    """
    def decorator(func):
        def _context(kwargs) -> Dict[str, Any]:
            context = {"operation": operation_name}
            for key in _CONTEXT_KEYS:
                if key in kwargs:
                    context[key] = kwargs[key]
            return context

        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            logger = StructuredLogger(func.__module__)
            context = _context(kwargs)
            logger.debug(f"Starting {operation_name}", extra=context)

            try:
                result = await func(*args, **kwargs)
                logger.debug(f"Completed {operation_name}", extra=context)
                return result
            except Exception as e:
                context["error"] = str(e)
                context["error_type"] = type(e).__name__
                logger.error(f"Failed {operation_name}", extra=context)
                raise

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            logger = StructuredLogger(func.__module__)
            context = _context(kwargs)
            logger.debug(f"Starting {operation_name}", extra=context)

            try:
                result = func(*args, **kwargs)
                logger.debug(f"Completed {operation_name}", extra=context)
                return result
            except Exception as e:
                context["error"] = str(e)
                context["error_type"] = type(e).__name__
                logger.error(f"Failed {operation_name}", extra=context)
                raise

        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator
