"""Resilience – retry and timeouts."""

from ga4_mp.resilience.retry import BackoffStrategy, ExponentialBackoff, RetryPolicy
from ga4_mp.resilience.timeouts import TimeoutPolicy

__all__ = ["BackoffStrategy", "ExponentialBackoff", "RetryPolicy", "TimeoutPolicy"]
