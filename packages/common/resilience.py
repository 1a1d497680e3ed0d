"""Resilience utilities for external service calls with retry logic.

Provides a decorator wrapping external calls with exponential backoff using
tenacity. Used for public address discovery only; the reconciliation core
never retries gateway calls itself (the orchestrator re-invokes it).
"""

import logging
from collections.abc import Callable
from typing import TypeVar

from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def resilient_external_call(
    max_attempts: int = 3,
    min_wait: float = 1,
    max_wait: float = 10,
    retry_on: tuple[type[Exception], ...] = (Exception,),
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Retry decorator for synchronous external service calls.

    Wraps external calls with exponential backoff retry logic. Logs warnings
    before each retry attempt and re-raises the last error.

    Args:
        max_attempts: Maximum retry attempts (default: 3).
        min_wait: Minimum wait time in seconds (default: 1).
        max_wait: Maximum wait time in seconds (default: 10).
        retry_on: Exception types to retry on (default: all exceptions).

    Returns:
        Callable: Decorated function with retry logic.

    Example:
        >>> @resilient_external_call(max_attempts=3, min_wait=2, max_wait=15)
        ... def fetch_ip(url: str) -> str:
        ...     return httpx.get(url).text
    """
    return retry(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=1, min=min_wait, max=max_wait),
        retry=retry_if_exception_type(retry_on),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )


__all__ = ["resilient_external_call"]
