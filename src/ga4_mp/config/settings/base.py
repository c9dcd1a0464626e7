"""Config settings – Settings base class and the client/batch settings."""
from __future__ import annotations

import dataclasses

from ga4_mp.config.validation import InvalidSettingValueError
from ga4_mp.kernel.limits import GA4


@dataclasses.dataclass
class Settings:
    """Base class for construction-time settings, loadable from the environment."""

    _prefix: dataclasses.ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class ClientSettings(Settings):
    """Endpoint identity and transport settings for ``DeliveryClient``."""

    _prefix: dataclasses.ClassVar[str] = "GA4"

    measurement_id: str
    api_secret: str
    base_url: str = GA4.BASE_URL
    timeout: float = GA4.TIMEOUT
    debug: bool = False
    strict: bool = False

    def _validate(self) -> None:
        if self.timeout <= 0:
            raise InvalidSettingValueError("timeout", self.timeout, "must be > 0")
        if not self.base_url.startswith(("http://", "https://")):
            raise InvalidSettingValueError("base_url", self.base_url, "must be an http(s) URL")


@dataclasses.dataclass
class BatchSettings(Settings):
    """Windowing settings for ``BatchAccumulator``."""

    _prefix: dataclasses.ClassVar[str] = "GA4"

    batch_size: int = GA4.BATCH_SIZE
    flush_interval: float = GA4.FLUSH_INTERVAL
    max_retries: int = GA4.MAX_RETRIES

    def _validate(self) -> None:
        if not 1 <= self.batch_size <= GA4.MAX_EVENTS:
            raise InvalidSettingValueError(
                "batch_size", self.batch_size, f"must be 1-{GA4.MAX_EVENTS}"
            )
        if self.flush_interval <= 0:
            raise InvalidSettingValueError("flush_interval", self.flush_interval, "must be > 0")
        if self.max_retries < 0:
            raise InvalidSettingValueError("max_retries", self.max_retries, "must be >= 0")


__all__ = ["BatchSettings", "ClientSettings", "Settings"]
