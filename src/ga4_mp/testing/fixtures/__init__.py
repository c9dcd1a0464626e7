"""Testing fixtures – register with ``pytest_plugins = ["ga4_mp.testing.fixtures"]``."""
from ga4_mp.testing.fixtures.delivery import delivery_client, fake_clock, recording_transport

__all__ = ["delivery_client", "fake_clock", "recording_transport"]
