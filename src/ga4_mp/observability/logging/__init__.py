"""Observability – structured logging helpers."""
from ga4_mp.observability.logging.factory import JsonLoggerFactory
from ga4_mp.observability.logging.filters import (
    DEFAULT_SENSITIVE_FIELDS,
    SensitiveFieldsFilter,
    redact_url,
)

__all__ = ["DEFAULT_SENSITIVE_FIELDS", "JsonLoggerFactory", "SensitiveFieldsFilter", "redact_url"]
