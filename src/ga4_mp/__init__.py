"""
ga4_mp – asyncio Measurement Protocol client with batching and retry.

Import path convention::

    from ga4_mp.application.delivery import BatchAccumulator, DeliveryClient
    from ga4_mp.kernel.types import Event, EventItem
    from ga4_mp.kernel.errors import ErrorCode, GA4Error
    from ga4_mp.resilience.retry import RetryPolicy

The names below are re-exported for convenience.
"""

from ga4_mp.application.delivery import BatchAccumulator, DeliveryClient
from ga4_mp.kernel.errors import ErrorCode, GA4Error, is_retryable
from ga4_mp.kernel.ids import generate_client_id, generate_session_id, to_micros
from ga4_mp.kernel.limits import GA4
from ga4_mp.kernel.types import DebugResponse, Event, EventItem, ValidationMessage
from ga4_mp.resilience.retry import RetryPolicy

__version__ = "0.1.0"
__all__ = [
    "GA4",
    "BatchAccumulator",
    "DebugResponse",
    "DeliveryClient",
    "ErrorCode",
    "Event",
    "EventItem",
    "GA4Error",
    "RetryPolicy",
    "ValidationMessage",
    "__version__",
    "generate_client_id",
    "generate_session_id",
    "is_retryable",
    "to_micros",
]
