"""HTTP adapter – HttpTransport, one Measurement Protocol POST per call."""
from __future__ import annotations

import json
import logging
from typing import Awaitable, Mapping, Protocol
from urllib.parse import urlencode

import httpx

from ga4_mp.kernel.errors import ErrorCode, GA4Error
from ga4_mp.kernel.limits import GA4
from ga4_mp.kernel.types import Event
from ga4_mp.observability.logging import redact_url
from ga4_mp.resilience.timeouts import TimeoutPolicy

logger = logging.getLogger(__name__)


class ResponseLike(Protocol):
    """The part of a response the transport reads (``httpx.Response`` fits)."""

    @property
    def status_code(self) -> int: ...

    @property
    def text(self) -> str: ...


class RequestFunc(Protocol):
    """Port: execute one HTTP request.

    ``httpx.AsyncClient.request`` satisfies this signature; tests substitute
    their own callable.
    """

    def __call__(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        content: bytes,
    ) -> Awaitable[ResponseLike]: ...


def error_for_response(status: int, body: str) -> GA4Error:
    """Map a non-2xx response to a classified :class:`GA4Error`."""
    if status == 429:
        return GA4Error(ErrorCode.RATE_LIMITED, "Rate limited", status, body)
    if status >= 500:
        return GA4Error(ErrorCode.SERVER, f"Server error {status}", status, body)
    if status >= 400:
        return GA4Error(ErrorCode.CLIENT, f"Client error {status}", status, body)
    return GA4Error(ErrorCode.UNKNOWN, f"Unexpected status {status}", status, body)


class HttpTransport:
    """Posts merged payloads to the collection or debug endpoint.

    Each :meth:`post` issues exactly one request, cancelled once ``timeout``
    seconds elapse. Without an injected *request* function the transport
    owns an ``httpx.AsyncClient``; close it with :meth:`aclose`.
    """

    def __init__(
        self,
        measurement_id: str,
        api_secret: str,
        *,
        base_url: str = GA4.BASE_URL,
        timeout: float = GA4.TIMEOUT,
        request: RequestFunc | None = None,
    ) -> None:
        self._measurement_id = measurement_id
        self._api_secret = api_secret
        self._base_url = base_url.rstrip("/")
        self._timeout = TimeoutPolicy(timeout)
        self._client: httpx.AsyncClient | None = None
        if request is None:
            # TimeoutPolicy is the only deadline
            self._client = httpx.AsyncClient(timeout=None)
            request = self._client.request
        self._request = request

    @property
    def timeout(self) -> float:
        return self._timeout.timeout_seconds

    def url_for(self, debug: bool) -> str:
        path = GA4.DEBUG_COLLECT_PATH if debug else GA4.COLLECT_PATH
        query = urlencode({"measurement_id": self._measurement_id, "api_secret": self._api_secret})
        return f"{self._base_url}{path}?{query}"

    async def post(self, payload: Event, *, debug: bool = False) -> ResponseLike:
        """Send *payload*; return the response or raise a classified error."""
        url = self.url_for(debug)
        try:
            body = json.dumps(payload.to_dict(), separators=(",", ":")).encode()
        except (TypeError, ValueError) as exc:
            raise GA4Error(
                ErrorCode.SERIALIZATION, f"Payload is not JSON serialisable: {exc}", cause=exc
            ) from exc

        logger.debug("ga4.post url=%s items=%d", redact_url(url), payload.item_count)
        try:
            response = await self._timeout.execute(
                lambda: self._request(
                    "POST",
                    url,
                    headers={"Content-Type": "application/json"},
                    content=body,
                )
            )
        except GA4Error:
            raise
        except httpx.TimeoutException as exc:
            raise GA4Error(
                ErrorCode.REQUEST, f"Timeout after {self.timeout:g}s", cause=exc
            ) from exc
        except Exception as exc:
            raise GA4Error(ErrorCode.REQUEST, f"Request failed: {exc}", cause=exc) from exc

        status = response.status_code
        if not 200 <= status < 300:
            error = error_for_response(status, response.text)
            logger.warning("ga4.post_failed url=%s status=%d code=%s", redact_url(url), status, error.code)
            raise error
        return response

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()


__all__ = ["HttpTransport", "RequestFunc", "ResponseLike", "error_for_response"]
