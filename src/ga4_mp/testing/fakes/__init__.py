"""Testing fakes – in-memory doubles."""
from ga4_mp.kernel.time import FrozenClock
from ga4_mp.testing.fakes.transport import RecordedRequest, RecordingTransport

__all__ = ["FrozenClock", "RecordedRequest", "RecordingTransport"]
