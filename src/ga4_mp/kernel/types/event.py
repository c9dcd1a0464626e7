"""Kernel types – Event and EventItem, the outbound payload model."""
from __future__ import annotations

import dataclasses
from typing import Any, Mapping, Sequence


@dataclasses.dataclass(frozen=True)
class EventItem:
    """A single named occurrence with optional parameters."""

    name: str
    params: Mapping[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name}
        if self.params:
            data["params"] = {k: v for k, v in self.params.items() if v is not None}
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EventItem":
        return cls(name=data.get("name", ""), params=data.get("params"))


@dataclasses.dataclass(frozen=True, kw_only=True)
class Event:
    """One logical submission: a client identifier plus one or more items.

    ``user_properties`` maps a property name to its plain value; the wire
    form wraps each value as ``{"value": ...}``.

    Example::

        Event(
            client_id=generate_client_id(),
            events=[EventItem("page_view", {"page_location": "/home"})],
        )
    """

    client_id: str
    events: Sequence[EventItem] = ()
    user_id: str | None = None
    timestamp_micros: int | None = None
    user_properties: Mapping[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready wire form, omitting unset fields."""
        data: dict[str, Any] = {"client_id": self.client_id}
        if self.user_id is not None:
            data["user_id"] = self.user_id
        if self.timestamp_micros is not None:
            data["timestamp_micros"] = self.timestamp_micros
        if self.user_properties:
            data["user_properties"] = {
                name: {"value": value} for name, value in self.user_properties.items()
            }
        data["events"] = [item.to_dict() for item in self.events]
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Event":
        """Build an event from its wire form.

        User property values may be given either wrapped (``{"value": v}``)
        or plain.
        """
        props = data.get("user_properties")
        if props is not None:
            props = {
                name: (value["value"] if isinstance(value, Mapping) and "value" in value else value)
                for name, value in props.items()
            }
        return cls(
            client_id=data.get("client_id", ""),
            user_id=data.get("user_id"),
            timestamp_micros=data.get("timestamp_micros"),
            user_properties=props,
            events=[EventItem.from_dict(item) for item in data.get("events") or ()],
        )

    @property
    def item_count(self) -> int:
        return len(self.events)


__all__ = ["Event", "EventItem"]
