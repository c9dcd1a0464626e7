"""Kernel types – payload model, debug report and Result values."""
from ga4_mp.kernel.types.debug import DebugResponse, ValidationMessage
from ga4_mp.kernel.types.event import Event, EventItem
from ga4_mp.kernel.types.result import Err, Ok, Result

__all__ = ["DebugResponse", "Err", "Event", "EventItem", "Ok", "Result", "ValidationMessage"]
