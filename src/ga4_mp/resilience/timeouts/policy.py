"""Resilience – TimeoutPolicy."""
from __future__ import annotations

import asyncio
import dataclasses
from typing import Awaitable, Callable, TypeVar

from ga4_mp.kernel.errors import ErrorCode, GA4Error

T = TypeVar("T")


@dataclasses.dataclass
class TimeoutPolicy:
    """Hard deadline: the awaited call is cancelled once ``timeout_seconds`` elapse."""
    timeout_seconds: float

    async def execute(self, func: Callable[[], Awaitable[T]]) -> T:
        try:
            return await asyncio.wait_for(func(), timeout=self.timeout_seconds)
        except TimeoutError as exc:
            raise GA4Error(
                ErrorCode.REQUEST, f"Timeout after {self.timeout_seconds:g}s", cause=exc
            ) from exc


__all__ = ["TimeoutPolicy"]
