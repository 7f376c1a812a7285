"""Backoff for admin API calls that fail transiently.

Only two things are worth another attempt: the request never got an
answer (:class:`TransportError`), or the API said to come back later
(HTTP 429 or 503). Everything else is the caller's problem and is
raised on the first failure.
"""

from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from cafe24_mcp.core.errors import ApiError, TransportError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

T = TypeVar("T")

_RETRYABLE_STATUSES = frozenset({429, 503})


@dataclass(frozen=True, slots=True)
class RetryConfig:
    """How many extra attempts to make and how long to wait between them.

    The wait before retry ``n`` (0-based) is ``base_delay * 2**n`` capped
    at ``max_delay``, scaled by a random factor in ``[0.5, 1.5]`` when
    ``jitter`` is on. The default makes no extra attempts.
    """

    max_retries: int = 0
    base_delay: float = 1.0
    max_delay: float = 30.0
    jitter: bool = True


def is_retryable(error: Exception) -> bool:
    if isinstance(error, TransportError):
        return True
    return isinstance(error, ApiError) and error.http_status in _RETRYABLE_STATUSES


def _compute_delay(attempt: int, config: RetryConfig, error: Exception) -> float:
    # A throttled response that names its own wait is taken at its word,
    # up to max_delay and without jitter.
    if isinstance(error, ApiError) and error.retry_after is not None:
        return min(error.retry_after, config.max_delay)

    delay = min(config.base_delay * 2**attempt, config.max_delay)
    if config.jitter:
        delay *= random.uniform(0.5, 1.5)
    return delay


async def retry_with_backoff(
    fn: Callable[[], Awaitable[T]],
    config: RetryConfig | None = None,
    on_retry: Callable[[int, float, Exception], None] | None = None,
) -> T:
    """Await ``fn()`` until it succeeds or a failure is final.

    A failure is final when :func:`is_retryable` rejects it or when
    ``config.max_retries`` extra attempts have been spent; either way
    the last exception propagates unchanged.

    Args:
        fn: Builds a fresh awaitable on every call.
        config: Backoff settings; ``None`` means a single attempt.
        on_retry: Called as ``on_retry(retry_number, delay, error)``
            just before sleeping, with ``retry_number`` counting from 1.
    """
    cfg = config or RetryConfig()
    retries = 0
    while True:
        try:
            return await fn()
        except Exception as e:
            if retries >= cfg.max_retries or not is_retryable(e):
                raise
            delay = _compute_delay(retries, cfg, e)
            retries += 1
            if on_retry is not None:
                on_retry(retries, delay, e)
            await asyncio.sleep(delay)
