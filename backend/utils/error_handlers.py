"""
Error handling decorators and utilities for the aggregation layer.

This module centralizes the "catch, log and rewrap" logic so every aggregation
method reports failures the same way: callers only ever see AggregationError,
with the original exception chained as its cause.
"""

import inspect
import logging
from functools import wraps
from typing import Any, Callable, Dict, Optional

from exceptions import AggregationError, DomainError

logger = logging.getLogger(__name__)


def handle_aggregation_errors(operation_name: str, subject: Optional[Callable[..., str]] = None):
    """
    Decorator that rewraps unexpected failures into AggregationError.

    Args:
        operation_name: Human-readable name of the operation (e.g. "apartment details")
        subject: Optional callable receiving the wrapped call's arguments and
            returning what was being aggregated (e.g. "apartment APT001")

    Example:
        @handle_aggregation_errors(
            "apartment details",
            lambda self, apartment, *_: f"apartment {apartment.unit_code}",
        )
        async def aggregate_apartment_details(self, apartment, ...):
            ...
    """
    def decorator(func: Callable):
        def _context(args, kwargs) -> str:
            if subject is None:
                return operation_name
            return f"{operation_name} for {subject(*args, **kwargs)}"

        def _wrap(error: Exception, args, kwargs) -> AggregationError:
            context = _context(args, kwargs)
            logger.error(f"Aggregation failed - {context}: {error}", exc_info=True)
            return AggregationError(context)

        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except AggregationError:
                raise
            except Exception as e:
                raise _wrap(e, args, kwargs) from e

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except AggregationError:
                raise
            except Exception as e:
                raise _wrap(e, args, kwargs) from e

        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator


def describe_apartment(apartment: Any) -> str:
    """Label for an apartment that may not be a valid Apartment at all."""
    return f"apartment {getattr(apartment, 'unit_code', 'unknown')}"


def describe_user(user: Any) -> str:
    """Label for a user that may not be a valid User at all."""
    phone = getattr(user, 'phone_number', None)
    return f"user {getattr(phone, 'value', 'unknown')}"


def describe_payment(payment: Any) -> str:
    return f"payment {getattr(payment, 'payment_id', 'unknown')}"


def describe_contract(contract: Any) -> str:
    return f"contract {getattr(contract, 'contract_id', 'unknown')}"


def error_to_dict(error: Exception) -> Dict[str, Any]:
    """
    Convert an exception into a serializable payload for external layers.

    Domain errors keep their discriminator; anything else is reported as a
    generic internal error without leaking its message.
    """
    if isinstance(error, DomainError):
        return {
            "error": type(error).__name__,
            "code": error.code,
            "message": error.message,
            "details": error.details,
            "status_code": error.status_code,
        }
    return {
        "error": "InternalError",
        "code": "INTERNAL_ERROR",
        "message": "Unexpected error",
        "details": {},
        "status_code": 500,
    }
