"""Application delivery – DeliveryClient."""
from __future__ import annotations

import json
import logging
from typing import Any, Sequence

from ga4_mp.adapters.http import HttpTransport, RequestFunc
from ga4_mp.config.settings import ClientSettings, EnvSettingsLoader, SettingsLoader
from ga4_mp.kernel.errors import ErrorCode, GA4Error
from ga4_mp.kernel.limits import GA4
from ga4_mp.kernel.time import Clock, SystemClock
from ga4_mp.kernel.types import DebugResponse, Err, Event, Ok, Result
from ga4_mp.kernel.validation import check_limits, merge_events, validate_batch
from ga4_mp.resilience.retry import RetryPolicy

logger = logging.getLogger(__name__)


class DeliveryClient:
    """Validates, merges and posts batches of events.

    Parameters
    ----------
    measurement_id, api_secret:
        Endpoint identity, sent as query parameters.
    base_url:
        Endpoint host. Defaults to the production host.
    timeout:
        Hard per-request deadline in seconds.
    debug:
        Send to the debug (validation-only) endpoint instead of collecting.
    strict:
        Also enforce the documented protocol limits (see
        :func:`~ga4_mp.kernel.validation.check_limits`) before sending.
    transport:
        Request function replacing the default ``httpx.AsyncClient``.
    clock:
        Time source for the timestamp window check in strict mode.

    Usage::

        async with DeliveryClient("G-XXXX", secret) as client:
            await client.send_with_retry([event])
    """

    def __init__(
        self,
        measurement_id: str,
        api_secret: str,
        *,
        base_url: str = GA4.BASE_URL,
        timeout: float = GA4.TIMEOUT,
        debug: bool = False,
        strict: bool = False,
        transport: RequestFunc | None = None,
        clock: Clock | None = None,
    ) -> None:
        if not measurement_id:
            raise GA4Error(ErrorCode.VALIDATION, "measurement_id is required")
        if not api_secret:
            raise GA4Error(ErrorCode.VALIDATION, "api_secret is required")

        self._settings = ClientSettings(
            measurement_id=measurement_id,
            api_secret=api_secret,
            base_url=base_url,
            timeout=timeout,
            debug=debug,
            strict=strict,
        )
        self._clock = clock or SystemClock()
        self._transport = HttpTransport(
            measurement_id,
            api_secret,
            base_url=base_url,
            timeout=timeout,
            request=transport,
        )

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings,
        *,
        transport: RequestFunc | None = None,
        clock: Clock | None = None,
    ) -> "DeliveryClient":
        return cls(
            settings.measurement_id,
            settings.api_secret,
            base_url=settings.base_url,
            timeout=settings.timeout,
            debug=settings.debug,
            strict=settings.strict,
            transport=transport,
            clock=clock,
        )

    @classmethod
    def from_env(
        cls,
        loader: SettingsLoader | None = None,
        *,
        transport: RequestFunc | None = None,
    ) -> "DeliveryClient":
        """Build from ``GA4_MEASUREMENT_ID``, ``GA4_API_SECRET`` and friends."""
        settings = (loader or EnvSettingsLoader()).load(ClientSettings)
        return cls.from_settings(settings, transport=transport)

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    async def __aenter__(self) -> "DeliveryClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._transport.aclose()

    # ------------------------------------------------------------------
    # Sending
    # ------------------------------------------------------------------

    async def send(self, event: Event) -> None:
        """Send a single event."""
        await self.send_batch([event])

    async def send_batch(self, events: Sequence[Event]) -> None:
        """Send up to ``GA4.MAX_EVENTS`` events in one request."""
        if not events:
            return
        payload = self._prepare(events)
        logger.debug("ga4.send_batch events=%d items=%d", len(events), payload.item_count)
        await self._transport.post(payload, debug=self._settings.debug)

    async def send_with_retry(
        self, events: Sequence[Event], policy: RetryPolicy | None = None
    ) -> None:
        """Send *events*, retrying rate-limit and server errors with backoff."""
        policy = policy or RetryPolicy()
        await policy.execute_async(lambda: self.send_batch(events))

    async def try_send(
        self, events: Sequence[Event], policy: RetryPolicy | None = None
    ) -> Result[None, GA4Error]:
        """Like :meth:`send_with_retry`, but return the failure instead of raising it."""
        try:
            await self.send_with_retry(events, policy)
        except GA4Error as exc:
            return Err(exc)
        return Ok(None)

    async def debug(self, events: Sequence[Event]) -> DebugResponse:
        """Validate *events* against the debug endpoint without collecting them."""
        if not events:
            return DebugResponse()
        payload = self._prepare(events)
        response = await self._transport.post(payload, debug=True)
        body = response.text
        try:
            return DebugResponse.from_dict(json.loads(body))
        except (ValueError, TypeError, KeyError, AttributeError) as exc:
            raise GA4Error(
                ErrorCode.SERIALIZATION, f"Invalid debug response: {body}", cause=exc
            ) from exc

    def _prepare(self, events: Sequence[Event]) -> Event:
        validate_batch(events)
        if self._settings.strict:
            errors = [
                {**violation, "event_index": index}
                for index, event in enumerate(events)
                for violation in check_limits(event, self._clock)
            ]
            if errors:
                raise GA4Error(
                    ErrorCode.VALIDATION,
                    f"{len(errors)} protocol limit violation(s)",
                    detail={"errors": errors},
                )
        return merge_events(events)


__all__ = ["DeliveryClient"]
