"""Resilience – timeout policies."""
from ga4_mp.resilience.timeouts.policy import TimeoutPolicy

__all__ = ["TimeoutPolicy"]
