"""Resilience – RetryPolicy."""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from ga4_mp.kernel.errors import GA4Error
from ga4_mp.kernel.limits import GA4
from ga4_mp.resilience.retry.backoff import ExponentialBackoff

T = TypeVar("T")
logger = logging.getLogger(__name__)


def _should_retry(exc: Exception) -> bool:
    return isinstance(exc, GA4Error) and exc.is_retryable()


class RetryPolicy:
    """Bounded exponential-backoff retry, no jitter.

    At most ``max_retries`` retries follow the first attempt, so a call makes
    up to ``max_retries + 1`` attempts. Only errors for which
    :func:`~ga4_mp.kernel.errors.is_retryable` holds are retried; anything
    else, and the last retryable error once the budget is spent, is re-raised
    unchanged.

    ``sleep`` is the suspension primitive used between attempts.
    """

    def __init__(
        self,
        max_retries: int = GA4.MAX_RETRIES,
        initial_delay: float = GA4.INITIAL_RETRY_DELAY,
        max_delay: float = GA4.MAX_RETRY_DELAY,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        self.max_retries = max_retries
        self.initial_delay = initial_delay
        self.max_delay = max_delay
        self.backoff = ExponentialBackoff(base_delay=initial_delay, max_delay=max_delay)
        self._sleep = sleep

    def __repr__(self) -> str:
        return (
            f"RetryPolicy(max_retries={self.max_retries}, "
            f"initial_delay={self.initial_delay}, max_delay={self.max_delay})"
        )

    async def execute_async(self, func: Callable[[], Awaitable[T]]) -> T:
        """Execute *func* with retry."""
        retry = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                if not _should_retry(exc) or retry >= self.max_retries:
                    raise
                delay = self.backoff.compute(retry)
                retry += 1
                logger.debug("ga4.retry attempt=%d delay=%.2fs exc=%r", retry, delay, exc)
                await self._sleep(delay)


__all__ = ["RetryPolicy"]
