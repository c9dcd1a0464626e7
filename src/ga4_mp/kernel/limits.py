"""Kernel limits – Measurement Protocol limits and client defaults.

Durations are in seconds.
"""
from __future__ import annotations

from typing import Final


class GA4:
    """Named bundle of protocol limits and library defaults."""

    BASE_URL: Final = "https://www.google-analytics.com"
    COLLECT_PATH: Final = "/mp/collect"
    DEBUG_COLLECT_PATH: Final = "/debug/mp/collect"

    TIMEOUT: Final = 30.0

    MAX_EVENTS: Final = 25
    MAX_EVENT_NAME: Final = 40
    MAX_PARAM_NAME: Final = 40
    MAX_PARAM_VALUE: Final = 100
    MAX_PARAMS: Final = 25
    MAX_USER_PROP_NAME: Final = 24
    MAX_USER_PROP_VALUE: Final = 36
    MAX_USER_PROPERTIES: Final = 25
    MAX_USER_ID: Final = 256
    MAX_BACKDATE_HOURS: Final = 72

    BATCH_SIZE: Final = 20
    FLUSH_INTERVAL: Final = 5.0
    MAX_RETRIES: Final = 3
    INITIAL_RETRY_DELAY: Final = 0.1
    MAX_RETRY_DELAY: Final = 30.0

    RESERVED_EVENT_NAMES: Final = frozenset({
        "ad_activeview", "ad_click", "ad_exposure", "ad_query", "adunit_exposure",
        "app_clear_data", "app_install", "app_remove", "app_update", "error",
        "first_open", "first_visit", "in_app_purchase", "notification_dismiss",
        "notification_foreground", "notification_open", "notification_receive",
        "os_update", "session_start", "screen_view", "user_engagement",
        "firebase_campaign",
    })
    RESERVED_PARAM_PREFIXES: Final = ("_", "firebase_", "ga_", "google_", "gtag.")
    RESERVED_USER_PROP_PREFIXES: Final = ("_", "firebase_", "ga_", "google_")


__all__ = ["GA4"]
