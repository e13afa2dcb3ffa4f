"""
Database utilities for connection management and error handling
"""
import asyncio
import functools
import logging
from typing import Callable, Any, Optional, TypeVar, cast, Awaitable

from app.core.config import settings
from app.core.exceptions import ConcurrencyConflict

logger = logging.getLogger(__name__)

# Define a type variable for the return type of the decorated function
T = TypeVar('T')

_CONNECTION_ERRORS = (
    "ConnectionError", "OperationalError",
    "ConnectionDoesNotExistError", "ConnectionRefusedError",
)


def _is_retryable(exc: Exception) -> bool:
    if isinstance(exc, ConcurrencyConflict):
        return True
    error_name = type(exc).__name__
    return any(err in error_name for err in _CONNECTION_ERRORS)


def with_db_retry(
    max_retries: Optional[int] = None,
    retry_delay: Optional[float] = None
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Decorator that retries database operations on connection errors and on
    lost optimistic-concurrency races.

    The wrapped coroutine must re-read whatever it writes on every call, so a
    retry works from fresh state.

    Args:
        max_retries: Maximum number of retries before giving up
            (defaults to settings.CONFLICT_MAX_RETRIES)
        retry_delay: Base delay between retries in seconds
            (defaults to settings.CONFLICT_RETRY_DELAY)

    Returns:
        Decorated function with retry logic
    """
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            retries_allowed = settings.CONFLICT_MAX_RETRIES if max_retries is None else max_retries
            base_delay = settings.CONFLICT_RETRY_DELAY if retry_delay is None else retry_delay
            retries = 0

            while True:
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    if not _is_retryable(e):
                        raise
                    retries += 1
                    if retries > retries_allowed:
                        logger.error(f"{func.__name__} failed after {retries_allowed} retries: {e}")
                        raise
                    delay = base_delay * (2 ** (retries - 1))  # Exponential backoff
                    logger.warning(
                        f"{func.__name__}: {type(e).__name__}: {e}. "
                        f"Retrying in {delay:.2f}s... (Attempt {retries}/{retries_allowed})"
                    )
                    await asyncio.sleep(delay)

        return cast(Callable[..., Awaitable[T]], wrapper)

    return decorator
