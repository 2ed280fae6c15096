"""
Exponential backoff retry for gateway HTTP calls.

Only HTTP errors whose status is listed in the policy are retried (by default
the transient 502/503/504). Validation, network and parse errors surface on
the first attempt. Business-level rejections never reach this layer.
"""

import asyncio
import random
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, TypeVar

import structlog

from placetopay.models.exceptions import HttpError, PlacetoPayError

logger = structlog.get_logger(__name__)

T = TypeVar("T")

JITTER_MIN = 0.7
JITTER_SPREAD = 0.6


@dataclass(frozen=True)
class RetryPolicy:
    """Immutable retry configuration shared by every call of a client."""

    max_attempts: int = 3
    base_delay_ms: float = 250
    max_delay_ms: float = 2000
    retry_on_http_statuses: tuple[int, ...] = (502, 503, 504)


DEFAULT_RETRY_POLICY = RetryPolicy()


def compute_backoff_ms(
    policy: RetryPolicy,
    attempt: int,
    rng: Callable[[], float] = random.random,
) -> float:
    """
    Delay before the attempt following ``attempt``.

    min(base * 2^(attempt-1), max) scaled by a jitter factor in [0.7, 1.3].
    """
    ceiling = min(policy.base_delay_ms * 2 ** (attempt - 1), policy.max_delay_ms)
    return ceiling * (JITTER_MIN + rng() * JITTER_SPREAD)


def is_retryable(error: Exception, policy: RetryPolicy) -> bool:
    if not isinstance(error, HttpError):
        return False
    return error.http_status in policy.retry_on_http_statuses


async def with_retry(
    fn: Callable[[int], Awaitable[T]],
    policy: RetryPolicy = DEFAULT_RETRY_POLICY,
    log: Any = None,
) -> T:
    """
    Execute an async callable with exponential backoff on retryable HTTP errors.

    Args:
        fn: Async callable receiving the 1-based attempt number
        policy: Retry configuration
        log: Optional structlog logger (defaults to this module's logger)

    Returns:
        The result of the first successful attempt.

    Raises:
        The last error, unchanged, once attempts are exhausted or as soon as
        an error is not retryable.
    """
    log = log or logger
    max_attempts = max(1, policy.max_attempts)

    for attempt in range(1, max_attempts + 1):
        try:
            return await fn(attempt)
        except PlacetoPayError as e:
            last_attempt = attempt == max_attempts
            if last_attempt or not is_retryable(e, policy):
                raise

            delay_ms = compute_backoff_ms(policy, attempt)
            log.warning(
                "placetopay_retry_scheduled",
                http_status=e.http_status,
                next_attempt=attempt + 1,
                max_attempts=max_attempts,
                delay_ms=round(delay_ms),
            )
            await asyncio.sleep(delay_ms / 1000)

    raise PlacetoPayError("Unexpected retry flow")
