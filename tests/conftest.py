"""Shared fixtures for the unit suite."""

from ga4_mp.testing.fixtures import delivery_client, fake_clock, recording_transport  # noqa: F401
