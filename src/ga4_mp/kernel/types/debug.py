"""Kernel types – debug endpoint validation report."""
from __future__ import annotations

import dataclasses
from typing import Any, Mapping


@dataclasses.dataclass(frozen=True)
class ValidationMessage:
    field_path: str
    description: str
    validation_code: str


@dataclasses.dataclass(frozen=True)
class DebugResponse:
    """Report returned by the debug collection endpoint."""

    validation_messages: list[ValidationMessage] = dataclasses.field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.validation_messages

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DebugResponse":
        """Parse ``{"validationMessages": [...]}``.

        Raises ``TypeError``/``KeyError`` when the shape does not match.
        """
        messages = data.get("validationMessages") or []
        return cls(
            validation_messages=[
                ValidationMessage(
                    field_path=m.get("fieldPath", ""),
                    description=m["description"],
                    validation_code=m.get("validationCode", ""),
                )
                for m in messages
            ]
        )


__all__ = ["DebugResponse", "ValidationMessage"]
