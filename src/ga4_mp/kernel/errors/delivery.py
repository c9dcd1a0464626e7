"""Delivery errors – the closed taxonomy of send failures."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from ga4_mp.kernel.errors.base import BaseError


class ErrorCode(StrEnum):
    """Every failure kind the delivery pipeline can report."""

    REQUEST = "request_error"
    SERIALIZATION = "serialization_error"
    VALIDATION = "validation_error"
    RATE_LIMITED = "rate_limited"
    TOO_MANY_EVENTS = "too_many_events"
    CLIENT = "client_error"
    SERVER = "server_error"
    UNKNOWN = "unknown_error"


_RETRYABLE_CODES = frozenset({ErrorCode.RATE_LIMITED, ErrorCode.SERVER})


def is_retryable(code: ErrorCode) -> bool:
    """Return ``True`` if re-sending after a *code* failure may succeed."""
    return code in _RETRYABLE_CODES


class GA4Error(BaseError):
    """A delivery failure tagged with an :class:`ErrorCode`.

    ``status_code`` and ``response_body`` are set for failures derived from
    an HTTP response and kept for diagnostics.
    """

    default_code = ErrorCode.UNKNOWN
    context_fields = ("status_code", "response_body")

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        status_code: int | None = None,
        response_body: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, code=code, **kwargs)
        self.code: ErrorCode = code
        self.status_code = status_code
        self.response_body = response_body

    def is_retryable(self) -> bool:
        return is_retryable(self.code)


__all__ = ["ErrorCode", "GA4Error", "is_retryable"]
