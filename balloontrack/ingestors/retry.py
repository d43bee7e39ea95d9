"""Retry helper with exponential backoff for upstream HTTP calls."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar

import httpx

logger = logging.getLogger("balloontrack.ingestors.retry")

T = TypeVar("T")

_RETRYABLE_MARKERS = ("network", "timeout", "econnrefused", "enotfound")


def is_retryable_error(error: BaseException) -> bool:
    """Timeouts, transport failures, rate limits and 5xx responses are retryable."""

    if isinstance(error, (httpx.TimeoutException, httpx.TransportError)):
        return True
    if isinstance(error, httpx.HTTPStatusError):
        status_code = error.response.status_code
        return status_code == 429 or status_code >= 500

    message = str(error).lower()
    return any(marker in message for marker in _RETRYABLE_MARKERS)


async def retry_with_backoff(
    fn: Callable[[int], Awaitable[T]],
    *,
    max_retries: int = 3,
    initial_delay: float = 1.0,
    max_delay: float = 30.0,
    multiplier: float = 2.0,
    retryable: Optional[Callable[[BaseException], bool]] = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Await ``fn(attempt)`` until it succeeds or retries are exhausted.

    ``fn`` receives the zero-based attempt number. Errors rejected by
    ``retryable`` are raised immediately; otherwise the last error is
    raised after ``max_retries`` retries.
    """

    if max_retries < 0:
        raise ValueError(f"max_retries must be non-negative, got {max_retries}")

    delay = initial_delay
    for attempt in range(max_retries + 1):
        try:
            return await fn(attempt)
        except Exception as exc:
            if retryable is not None and not retryable(exc):
                raise
            if attempt == max_retries:
                raise
            wait = min(delay, max_delay)
            logger.debug("Attempt %s failed (%s); retrying in %.1fs", attempt, exc, wait)
            await sleep(wait)
            delay *= multiplier


__all__ = ["is_retryable_error", "retry_with_backoff"]
