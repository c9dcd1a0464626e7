"""Kernel validation – structural checks and batch merging.

``validate_event`` is the gate every event passes before a request is made.
``check_limits`` reports the wider protocol limits and is only enforced by
clients built with ``strict=True``.
"""
from __future__ import annotations

import re
from datetime import timedelta
from typing import Any, Sequence

from ga4_mp.kernel.errors import ErrorCode, GA4Error
from ga4_mp.kernel.limits import GA4
from ga4_mp.kernel.time import Clock, SystemClock
from ga4_mp.kernel.types import Event

_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")


def validate_event(event: Event) -> None:
    """Raise ``GA4Error(VALIDATION)`` if *event* cannot be submitted."""
    if not event.client_id:
        raise GA4Error(ErrorCode.VALIDATION, "client_id is required")
    if not event.events:
        raise GA4Error(ErrorCode.VALIDATION, "At least one event is required")

    for item in event.events:
        if not item.name:
            raise GA4Error(ErrorCode.VALIDATION, "Event name is required")
        if len(item.name) > GA4.MAX_EVENT_NAME:
            raise GA4Error(
                ErrorCode.VALIDATION,
                f"Event name exceeds {GA4.MAX_EVENT_NAME} chars: {item.name}",
            )


def validate_batch(events: Sequence[Event]) -> None:
    """Reject the whole batch if it is too large or any event is invalid."""
    if len(events) > GA4.MAX_EVENTS:
        raise GA4Error(
            ErrorCode.TOO_MANY_EVENTS, f"Max {GA4.MAX_EVENTS} events, got {len(events)}"
        )
    for event in events:
        validate_event(event)


def merge_events(events: Sequence[Event]) -> Event:
    """Fold a batch into one request body.

    Identity fields (``client_id``, ``user_id``, ``timestamp_micros``,
    ``user_properties``) come from the first event only; items of every event
    are concatenated in order.
    """
    if not events:
        raise GA4Error(ErrorCode.VALIDATION, "No events to merge")
    first, *rest = events
    if not rest:
        return first

    return Event(
        client_id=first.client_id,
        user_id=first.user_id,
        timestamp_micros=first.timestamp_micros,
        user_properties=first.user_properties,
        events=[item for event in events for item in event.events],
    )


def _violation(field: str, message: str) -> dict[str, Any]:
    return {"field": field, "message": message}


def check_limits(event: Event, clock: Clock | None = None) -> list[dict[str, Any]]:
    """Return field-level violations of the documented protocol limits."""
    clock = clock or SystemClock()
    errors: list[dict[str, Any]] = []

    if event.user_id is not None and len(event.user_id) > GA4.MAX_USER_ID:
        errors.append(_violation("user_id", f"exceeds {GA4.MAX_USER_ID} chars"))

    if event.timestamp_micros is not None:
        now_micros = int(clock.timestamp() * 1_000_000)
        window = int(timedelta(hours=GA4.MAX_BACKDATE_HOURS).total_seconds() * 1_000_000)
        if event.timestamp_micros < now_micros - window:
            errors.append(
                _violation("timestamp_micros", f"older than {GA4.MAX_BACKDATE_HOURS} hours")
            )
        elif event.timestamp_micros > now_micros:
            errors.append(_violation("timestamp_micros", "is in the future"))

    props = event.user_properties or {}
    if len(props) > GA4.MAX_USER_PROPERTIES:
        errors.append(
            _violation("user_properties", f"more than {GA4.MAX_USER_PROPERTIES} properties")
        )
    for name, value in props.items():
        path = f"user_properties.{name}"
        if len(name) > GA4.MAX_USER_PROP_NAME:
            errors.append(_violation(path, f"name exceeds {GA4.MAX_USER_PROP_NAME} chars"))
        if name.startswith(GA4.RESERVED_USER_PROP_PREFIXES):
            errors.append(_violation(path, "name uses a reserved prefix"))
        if isinstance(value, str) and len(value) > GA4.MAX_USER_PROP_VALUE:
            errors.append(_violation(path, f"value exceeds {GA4.MAX_USER_PROP_VALUE} chars"))

    for index, item in enumerate(event.events):
        path = f"events[{index}]"
        if item.name and not _NAME_RE.match(item.name):
            errors.append(
                _violation(f"{path}.name", "must start with a letter and use only [A-Za-z0-9_]")
            )
        if item.name in GA4.RESERVED_EVENT_NAMES:
            errors.append(_violation(f"{path}.name", f"'{item.name}' is reserved"))

        params = item.params or {}
        if len(params) > GA4.MAX_PARAMS:
            errors.append(_violation(f"{path}.params", f"more than {GA4.MAX_PARAMS} params"))
        for key, value in params.items():
            param_path = f"{path}.params.{key}"
            if len(key) > GA4.MAX_PARAM_NAME:
                errors.append(_violation(param_path, f"name exceeds {GA4.MAX_PARAM_NAME} chars"))
            if key.startswith(GA4.RESERVED_PARAM_PREFIXES):
                errors.append(_violation(param_path, "name uses a reserved prefix"))
            if isinstance(value, str) and len(value) > GA4.MAX_PARAM_VALUE:
                errors.append(
                    _violation(param_path, f"value exceeds {GA4.MAX_PARAM_VALUE} chars")
                )

    return errors


__all__ = ["check_limits", "merge_events", "validate_batch", "validate_event"]
