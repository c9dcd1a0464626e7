"""Observability – SensitiveFieldsFilter and URL redaction."""
from __future__ import annotations

from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

DEFAULT_SENSITIVE_FIELDS: frozenset[str] = frozenset({"api_secret", "authorization", "secret"})


class SensitiveFieldsFilter:
    """Replace values of sensitive keys with ``[REDACTED]``."""

    REDACTED = "[REDACTED]"

    def __init__(self, sensitive_fields: frozenset[str] | None = None) -> None:
        self._fields = sensitive_fields or DEFAULT_SENSITIVE_FIELDS

    def is_sensitive(self, key: str) -> bool:
        return key.lower() in self._fields

    def redact(self, data: dict[str, Any]) -> dict[str, Any]:
        return {k: (self.REDACTED if self.is_sensitive(k) else v) for k, v in data.items()}

    def redact_deep(self, data: dict[str, Any]) -> dict[str, Any]:
        """Recursively redact nested dicts."""
        result: dict[str, Any] = {}
        for k, v in data.items():
            if self.is_sensitive(k):
                result[k] = self.REDACTED
            elif isinstance(v, dict):
                result[k] = self.redact_deep(v)
            else:
                result[k] = v
        return result

    def redact_url(self, url: str) -> str:
        """Mask sensitive query parameters of *url*."""
        parts = urlsplit(url)
        if not parts.query:
            return url
        query = [
            (k, self.REDACTED if self.is_sensitive(k) else v)
            for k, v in parse_qsl(parts.query, keep_blank_values=True)
        ]
        return urlunsplit(parts._replace(query=urlencode(query, safe="[]")))


_default_filter = SensitiveFieldsFilter()


def redact_url(url: str) -> str:
    """Mask ``api_secret`` (and other default sensitive keys) in *url*."""
    return _default_filter.redact_url(url)


__all__ = ["DEFAULT_SENSITIVE_FIELDS", "SensitiveFieldsFilter", "redact_url"]
