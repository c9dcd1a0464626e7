"""Kernel ids – client/session identifiers and timestamp conversion."""
from __future__ import annotations

import uuid
from datetime import datetime

from ga4_mp.kernel.time import Clock, SystemClock


def generate_client_id() -> str:
    """Return a new UUID4 string suitable for ``Event.client_id``."""
    return str(uuid.uuid4())


def generate_session_id(clock: Clock | None = None) -> str:
    """Return the current Unix time in whole seconds, as a string.

    Put it in item params as ``session_id`` for Realtime reports.
    """
    clock = clock or SystemClock()
    return str(int(clock.timestamp()))


def to_micros(value: datetime | float) -> int:
    """Convert a datetime or Unix timestamp (seconds) to ``timestamp_micros``."""
    if isinstance(value, datetime):
        value = value.timestamp()
    return int(round(value * 1_000_000))


__all__ = ["generate_client_id", "generate_session_id", "to_micros"]
