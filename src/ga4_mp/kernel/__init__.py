"""Kernel – payload model, errors, limits and validation (no I/O)."""

from ga4_mp.kernel.errors import BaseError, ErrorCode, GA4Error, is_retryable
from ga4_mp.kernel.limits import GA4

__all__ = ["GA4", "BaseError", "ErrorCode", "GA4Error", "is_retryable"]
