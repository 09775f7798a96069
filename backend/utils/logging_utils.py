"""
Structured Logging Utilities

Provides utilities for adding structured context to log messages,
so every line about a lending operation carries the ids it touched.
"""

import inspect
import logging
from typing import Any, Dict, Optional
from contextvars import ContextVar
from functools import wraps

from exceptions import ApplicationError


# Context variable for request-scoped logging context
_logging_context: ContextVar[Dict[str, Any]] = ContextVar('logging_context', default={})

# Keyword arguments picked up automatically by log_operation
CONTEXT_KEYS = ("book_id", "member_id", "loan_id")


class StructuredLogger:
    """
    Wrapper around standard logger that adds structured context.

    Usage:
        logger = StructuredLogger(__name__)
        logger.info("Loan started", extra={
            "loan_id": loan.id,
            "book_id": loan.book_id,
            "member_id": loan.member_id,
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
        """
        Merge the ContextVar context with per-call extra fields.

        Returns:
            Merged context dict
        """
        context = _logging_context.get().copy()
        if extra:
            context.update(extra)
        return context

    def _format(self, message: str, context: Dict[str, Any]) -> str:
        if not context:
            return message
        fields = " ".join(f"{k}={v}" for k, v in sorted(context.items()))
        return f"{message} [{fields}]"

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        context = self._add_context(extra)
        self.logger.debug(self._format(message, context), extra={"context": context})

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        context = self._add_context(extra)
        self.logger.info(self._format(message, context), extra={"context": context})

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        context = self._add_context(extra)
        self.logger.warning(self._format(message, context), extra={"context": context})

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None, exc_info: bool = False):
        context = self._add_context(extra)
        self.logger.error(self._format(message, context), extra={"context": context}, exc_info=exc_info)


def set_logging_context(**kwargs):
    """
    Set logging context for the current request/operation.

    This context will be automatically included in all log messages
    within the current context (typically a request).

    Example:
        set_logging_context(request_id="abc-123", operation="start_loan")
    """
    context = _logging_context.get().copy()
    context.update(kwargs)
    _logging_context.set(context)


def clear_logging_context():
    """Clear the logging context."""
    _logging_context.set({})


def log_operation(operation_name: str):
    """
    Decorator to log operation start/end with structured context.

    Ids passed as book_id / member_id / loan_id (positionally or by keyword)
    are attached to every message. Domain failures are logged at warning
    level and re-raised unchanged.

    Args:
        operation_name: Name of the operation

    Example:
        @log_operation("start_loan")
        def start_loan(self, book_id: str, member_id: str):
            ...
    """
    def decorator(func):
        signature = inspect.signature(func)

        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = StructuredLogger(func.__module__)

            context = {"operation": operation_name}
            bound = signature.bind_partial(*args, **kwargs)
            for key in CONTEXT_KEYS:
                if key in bound.arguments:
                    context[key] = bound.arguments[key]

            logger.debug(f"Starting {operation_name}", extra=context)

            try:
                result = func(*args, **kwargs)
            except ApplicationError as e:
                context["error"] = e.message
                context["error_type"] = type(e).__name__
                logger.warning(f"Rejected {operation_name}", extra=context)
                raise
            except Exception as e:
                context["error"] = str(e)
                context["error_type"] = type(e).__name__
                logger.error(f"Failed {operation_name}", extra=context, exc_info=True)
                raise

            logger.info(f"Completed {operation_name}", extra=context)
            return result

        return wrapper

    return decorator
