"""Resilience – retry with exponential backoff."""
from ga4_mp.resilience.retry.backoff import BackoffStrategy, ExponentialBackoff
from ga4_mp.resilience.retry.policy import RetryPolicy

__all__ = ["BackoffStrategy", "ExponentialBackoff", "RetryPolicy"]
