"""Root error shared by delivery and configuration failures."""

from __future__ import annotations

import json
from typing import Any, ClassVar


class BaseError(Exception):
    """Common shape of every error ga4-mp raises.

    ``code`` is a stable slug (or :class:`~ga4_mp.kernel.errors.ErrorCode`)
    for programmatic handling, ``detail`` holds structured context such as
    strict-mode violations, and ``cause`` is chained as ``__cause__``.

    Subclasses name their own diagnostic attributes in ``context_fields``;
    :meth:`to_dict` emits them next to the common keys, so log lines carry
    the HTTP status of a failed post or the env var of a bad setting.
    """

    default_code: ClassVar[str] = "ga4_mp_error"
    context_fields: ClassVar[tuple[str, ...]] = ()

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = detail or {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "code": str(self.code),
            "message": self.message,
            "detail": self.detail,
        }
        for name in self.context_fields:
            payload[name] = getattr(self, name, None)
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload


__all__ = ["BaseError"]
