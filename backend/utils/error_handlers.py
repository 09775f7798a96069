"""
Error handling decorators and utilities for API endpoints.

Centralizes the translation of application exceptions into HTTP
responses so routers stay free of try/except blocks.
"""

import inspect
import logging
from functools import wraps
from typing import Callable

from fastapi import HTTPException

from constants import HTTPStatus
from exceptions import (
    ApplicationError,
    ConcurrencyConflictError,
    InvariantViolation,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def to_http_exception(operation_name: str, error: Exception) -> HTTPException:
    """
    Map an exception raised by a service to an HTTPException.

    The response detail carries the message plus the structured details so
    clients can tell which rule was violated.

    Args:
        operation_name: Human-readable name of the operation
        error: The exception to translate

    Returns:
        HTTPException ready to raise
    """
    if isinstance(error, ValidationError):
        logger.warning(f"{operation_name} - Validation error: {error.message}")
        return HTTPException(
            status_code=HTTPStatus.BAD_REQUEST,
            detail={"error": error.message, **error.details},
        )
    if isinstance(error, NotFoundError):
        logger.info(f"{operation_name} - Not found: {error.message}")
        return HTTPException(
            status_code=HTTPStatus.NOT_FOUND,
            detail={"error": error.message, **error.details},
        )
    if isinstance(error, InvariantViolation):
        logger.warning(f"{operation_name} - Rule violated ({error.rule}): {error.message}")
        return HTTPException(
            status_code=HTTPStatus.CONFLICT,
            detail={"error": error.message, **error.details},
        )
    if isinstance(error, ConcurrencyConflictError):
        logger.warning(f"{operation_name} - Concurrency conflict: {error.message}")
        return HTTPException(
            status_code=HTTPStatus.CONFLICT,
            detail={"error": error.message, **error.details},
        )
    if isinstance(error, ApplicationError):
        logger.error(f"{operation_name} - Application error: {error.message}", exc_info=True)
        return HTTPException(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            detail={"error": f"{operation_name} failed: {error.message}"},
        )

    logger.error(f"{operation_name} - Unexpected error: {error}", exc_info=True)
    return HTTPException(
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
        detail={"error": f"{operation_name} failed. Please check server logs."},
    )


def handle_api_errors(operation_name: str):
    """
    Decorator to handle common API errors consistently across endpoints.

    Args:
        operation_name: Human-readable name of the operation (e.g., "Start loan")

    Returns:
        Decorated function that handles errors uniformly

    Example:
        @router.post("/loans")
        @handle_api_errors("Start loan")
        def create_loan(...):
            return service.start_loan(...)
    """
    def decorator(func: Callable):
        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                # Re-raise HTTPException as-is to preserve status code and detail
                raise
            except Exception as e:
                raise to_http_exception(operation_name, e) from e

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except HTTPException:
                raise
            except Exception as e:
                raise to_http_exception(operation_name, e) from e

        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator
