"""Exponential backoff retry decorator for async network calls."""

from __future__ import annotations

import asyncio
import functools
from typing import Any, Callable, TypeVar

import aiohttp
import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")

NETWORK_ERRORS: tuple[type[Exception], ...] = (
    aiohttp.ClientError,
    asyncio.TimeoutError,
    ConnectionResetError,
)


def async_retry(
    max_attempts: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    exceptions: tuple[type[Exception], ...] = NETWORK_ERRORS,
) -> Callable:
    """Decorator for async functions with exponential backoff retry.

    Only transient network failures are retried by default; anything else
    propagates on the first attempt.

    Args:
        max_attempts: Maximum number of attempts (including the first).
        base_delay: Initial delay in seconds (doubles each retry).
        max_delay: Maximum delay between retries.
        exceptions: Tuple of exception types to catch and retry.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            last_exception: Exception | None = None
            for attempt in range(max_attempts):
                try:
                    return await func(*args, **kwargs)
                except exceptions as e:
                    last_exception = e
                    if attempt == max_attempts - 1:
                        logger.warning(
                            "retry.exhausted",
                            func=func.__name__,
                            attempts=max_attempts,
                            error=str(e),
                        )
                        break
                    delay = min(base_delay * (2**attempt), max_delay)
                    logger.warning(
                        "retry.scheduled",
                        func=func.__name__,
                        attempt=attempt + 1,
                        max_attempts=max_attempts,
                        delay=delay,
                        error=str(e),
                    )
                    await asyncio.sleep(delay)
            raise last_exception  # type: ignore[misc]

        return wrapper

    return decorator
