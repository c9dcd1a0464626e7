"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── GA4Error            (delivery.py, tagged with ErrorCode)
    └── ConfigError         (ga4_mp.config.validation)
        ├── MissingRequiredSettingError
        └── InvalidSettingValueError
"""

from ga4_mp.kernel.errors.base import BaseError
from ga4_mp.kernel.errors.delivery import ErrorCode, GA4Error, is_retryable

__all__ = ["BaseError", "ErrorCode", "GA4Error", "is_retryable"]
