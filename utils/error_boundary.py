"""
Top-level error boundary for webhook processing.

Webhook senders retry anything that is not a 2xx, and a retried delivery
of an already consumed inventory update does more harm than a dropped one.
Functions wrapped with report_and_acknowledge therefore log the failure and
return an acknowledgement instead of raising.
"""

from functools import wraps
from typing import Any, Callable, TypeVar

import structlog

from exceptions import AppError

logger = structlog.get_logger(__name__)

HANDLED_ERROR_MESSAGE = "Handled error"

F = TypeVar("F", bound=Callable[..., Any])


def report_and_acknowledge(acknowledge: Callable[[str], Any]) -> Callable[[F], F]:
    """
    Log any exception raised by the wrapped function and acknowledge instead.

    Args:
        acknowledge: Builds the value returned in place of the failed call,
                     given the acknowledgement message

    Usage:
        @report_and_acknowledge(SyncResult.handled_error)
        def sync(self, raw_body): ...
    """
    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except AppError as e:
                logger.error(
                    "webhook_handled_error",
                    operation=func.__name__,
                    error_code=e.code,
                    error=e.message,
                    details=e.details,
                )
                return acknowledge(HANDLED_ERROR_MESSAGE)
            except Exception as e:
                logger.exception(
                    "webhook_handled_error",
                    operation=func.__name__,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                return acknowledge(HANDLED_ERROR_MESSAGE)

        return wrapper  # type: ignore[return-value]

    return decorator
