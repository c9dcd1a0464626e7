"""Resilience – backoff strategies."""
from __future__ import annotations

import abc


class BackoffStrategy(abc.ABC):
    """Compute wait duration (seconds) before the *retry*-th retry (0-based)."""

    @abc.abstractmethod
    def compute(self, retry: int) -> float: ...


class ExponentialBackoff(BackoffStrategy):
    """Delay doubles each retry: ``min(base_delay * 2^retry, max_delay)``."""

    def __init__(self, base_delay: float = 0.1, max_delay: float = 30.0) -> None:
        self._base = base_delay
        self._max = max_delay

    def compute(self, retry: int) -> float:
        return min(self._base * (2 ** retry), self._max)


__all__ = ["BackoffStrategy", "ExponentialBackoff"]
