"""Testing support – fakes and pytest fixtures.

Import in your ``conftest.py``::

    pytest_plugins = ["ga4_mp.testing.fixtures"]
"""

from ga4_mp.testing.fakes import FrozenClock, RecordedRequest, RecordingTransport

__all__ = ["FrozenClock", "RecordedRequest", "RecordingTransport"]
