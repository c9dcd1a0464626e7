"""Observability – logging configuration and redaction."""

from ga4_mp.observability.logging import JsonLoggerFactory, SensitiveFieldsFilter, redact_url

__all__ = ["JsonLoggerFactory", "SensitiveFieldsFilter", "redact_url"]
