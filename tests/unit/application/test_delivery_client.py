"""Unit tests – DeliveryClient: batching rules, retry and debug validation."""
from __future__ import annotations

import asyncio

import httpx
import pytest
import respx

from ga4_mp.application.delivery import DeliveryClient
from ga4_mp.config import ClientSettings, MissingRequiredSettingError
from ga4_mp.kernel.errors import ErrorCode, GA4Error
from ga4_mp.kernel.limits import GA4
from ga4_mp.kernel.types import DebugResponse, Err, Event, EventItem, Ok
from ga4_mp.resilience.retry import RetryPolicy
from ga4_mp.testing import RecordingTransport


def _event(client_id: str = "c1", *names: str, **kwargs) -> Event:
    return Event(client_id=client_id, events=[EventItem(n) for n in (names or ("page_view",))], **kwargs)


def _client(transport: RecordingTransport, **kwargs) -> DeliveryClient:
    return DeliveryClient("G-TEST123", "test-secret", transport=transport, **kwargs)


def _no_sleep_policy(max_retries: int) -> tuple[RetryPolicy, list[float]]:
    delays: list[float] = []

    async def sleep(delay: float) -> None:
        delays.append(delay)

    return RetryPolicy(max_retries=max_retries, sleep=sleep), delays


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    @pytest.mark.parametrize(("mid", "secret"), [("", "s"), ("G-1", "")])
    def test_missing_credentials(self, mid: str, secret: str) -> None:
        with pytest.raises(GA4Error) as exc_info:
            DeliveryClient(mid, secret, transport=RecordingTransport())
        assert exc_info.value.code is ErrorCode.VALIDATION

    def test_defaults(self) -> None:
        client = _client(RecordingTransport())
        assert client.settings.base_url == GA4.BASE_URL
        assert client.settings.timeout == 30.0
        assert client.settings.debug is False
        assert client.settings.strict is False

    def test_from_settings(self) -> None:
        transport = RecordingTransport()
        settings = ClientSettings(
            measurement_id="G-S", api_secret="x", base_url="https://ga.example", debug=True
        )
        client = DeliveryClient.from_settings(settings, transport=transport)
        asyncio.run(client.send(_event()))
        assert transport.requests[0].url.startswith("https://ga.example/debug/mp/collect?")

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GA4_MEASUREMENT_ID", "G-ENV")
        monkeypatch.setenv("GA4_API_SECRET", "env-secret")
        monkeypatch.setenv("GA4_TIMEOUT", "2.5")
        client = DeliveryClient.from_env(transport=RecordingTransport())
        assert client.settings.measurement_id == "G-ENV"
        assert client.settings.timeout == 2.5

    def test_from_env_missing_secret(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GA4_MEASUREMENT_ID", "G-ENV")
        monkeypatch.delenv("GA4_API_SECRET", raising=False)
        with pytest.raises(MissingRequiredSettingError):
            DeliveryClient.from_env(transport=RecordingTransport())

    @respx.mock
    def test_async_context_manager_uses_httpx(self) -> None:
        route = respx.post(f"{GA4.BASE_URL}/mp/collect").mock(return_value=httpx.Response(204))

        async def run() -> None:
            async with DeliveryClient("G-TEST123", "test-secret") as client:
                await client.send(_event())

        asyncio.run(run())
        assert route.call_count == 1


# ---------------------------------------------------------------------------
# send / send_batch
# ---------------------------------------------------------------------------


class TestSendBatch:
    def test_empty_batch_is_noop(self, delivery_client, recording_transport) -> None:
        asyncio.run(delivery_client.send_batch([]))
        assert recording_transport.call_count == 0

    def test_too_many_events_makes_no_request(self, delivery_client, recording_transport) -> None:
        with pytest.raises(GA4Error) as exc_info:
            asyncio.run(delivery_client.send_batch([_event()] * 26))
        assert exc_info.value.code is ErrorCode.TOO_MANY_EVENTS
        assert exc_info.value.message == "Max 25 events, got 26"
        assert recording_transport.call_count == 0

    def test_invalid_event_rejects_whole_batch(self, delivery_client, recording_transport) -> None:
        with pytest.raises(GA4Error) as exc_info:
            asyncio.run(delivery_client.send_batch([_event(), _event("c2", "x" * 41)]))
        assert exc_info.value.code is ErrorCode.VALIDATION
        assert recording_transport.call_count == 0

    def test_batch_is_merged_into_one_request(self, delivery_client, recording_transport) -> None:
        batch = [_event("c1", "a", user_id="u1"), _event("c2", "b", "c", user_id="u2")]
        asyncio.run(delivery_client.send_batch(batch))
        assert recording_transport.call_count == 1
        assert recording_transport.payloads() == [
            {
                "client_id": "c1",
                "user_id": "u1",
                "events": [{"name": "a"}, {"name": "b"}, {"name": "c"}],
            }
        ]

    def test_send_single_event(self, delivery_client, recording_transport) -> None:
        asyncio.run(delivery_client.send(_event("c9", "login")))
        request = recording_transport.requests[0]
        assert request.method == "POST"
        assert "/mp/collect?measurement_id=G-TEST123&api_secret=test-secret" in request.url
        assert request.json() == {"client_id": "c9", "events": [{"name": "login"}]}

    def test_debug_client_targets_debug_endpoint(self) -> None:
        transport = RecordingTransport()
        asyncio.run(_client(transport, debug=True).send(_event()))
        assert "/debug/mp/collect?" in transport.requests[0].url

    def test_client_error_is_not_retried_by_send_batch(self) -> None:
        transport = RecordingTransport([httpx.Response(400, text="bad request")])
        with pytest.raises(GA4Error) as exc_info:
            asyncio.run(_client(transport).send_batch([_event()]))
        assert exc_info.value.code is ErrorCode.CLIENT
        assert exc_info.value.response_body == "bad request"
        assert transport.call_count == 1


class TestStrictMode:
    def test_strict_rejects_limit_violations(self, fake_clock) -> None:
        transport = RecordingTransport()
        client = _client(transport, strict=True, clock=fake_clock)
        with pytest.raises(GA4Error) as exc_info:
            asyncio.run(client.send_batch([_event(), _event("c2", "session_start")]))
        assert exc_info.value.code is ErrorCode.VALIDATION
        assert exc_info.value.detail["errors"] == [
            {"field": "events[0].name", "message": "'session_start' is reserved", "event_index": 1}
        ]
        assert transport.call_count == 0

    def test_non_strict_sends_same_batch(self) -> None:
        transport = RecordingTransport()
        asyncio.run(_client(transport).send_batch([_event("c2", "session_start")]))
        assert transport.call_count == 1

    def test_strict_accepts_clean_batch(self) -> None:
        transport = RecordingTransport()
        asyncio.run(_client(transport, strict=True).send_batch([_event()]))
        assert transport.call_count == 1


# ---------------------------------------------------------------------------
# send_with_retry / try_send
# ---------------------------------------------------------------------------


class TestSendWithRetry:
    def test_succeeds_on_third_attempt(self) -> None:
        transport = RecordingTransport([503, 503, 204])
        policy, delays = _no_sleep_policy(max_retries=3)
        asyncio.run(_client(transport).send_with_retry([_event()], policy))
        assert transport.call_count == 3
        assert delays == [0.1, 0.2]

    def test_fails_when_budget_is_too_small(self) -> None:
        transport = RecordingTransport([503, 503, 204])
        policy, _ = _no_sleep_policy(max_retries=1)
        with pytest.raises(GA4Error) as exc_info:
            asyncio.run(_client(transport).send_with_retry([_event()], policy))
        assert exc_info.value.code is ErrorCode.SERVER
        assert exc_info.value.status_code == 503
        assert transport.call_count == 2

    def test_rate_limit_is_retried(self) -> None:
        transport = RecordingTransport([429, 204])
        policy, _ = _no_sleep_policy(max_retries=3)
        asyncio.run(_client(transport).send_with_retry([_event()], policy))
        assert transport.call_count == 2

    def test_client_error_is_not_retried(self) -> None:
        transport = RecordingTransport([404, 204])
        policy, delays = _no_sleep_policy(max_retries=3)
        with pytest.raises(GA4Error) as exc_info:
            asyncio.run(_client(transport).send_with_retry([_event()], policy))
        assert exc_info.value.code is ErrorCode.CLIENT
        assert transport.call_count == 1
        assert delays == []

    def test_validation_failure_is_not_retried(self) -> None:
        transport = RecordingTransport()
        policy, _ = _no_sleep_policy(max_retries=3)
        with pytest.raises(GA4Error):
            asyncio.run(_client(transport).send_with_retry([_event("")], policy))
        assert transport.call_count == 0

    def test_default_policy(self) -> None:
        transport = RecordingTransport([204])
        asyncio.run(_client(transport).send_with_retry([_event()]))
        assert transport.call_count == 1

    def test_try_send_ok(self) -> None:
        result = asyncio.run(_client(RecordingTransport()).try_send([_event()]))
        assert result == Ok(None)

    def test_try_send_err(self) -> None:
        transport = RecordingTransport([400])
        result = asyncio.run(_client(transport).try_send([_event()]))
        assert isinstance(result, Err)
        assert result.error.code is ErrorCode.CLIENT


# ---------------------------------------------------------------------------
# debug
# ---------------------------------------------------------------------------


class TestDebug:
    def test_parses_validation_report(self) -> None:
        body = {
            "validationMessages": [
                {
                    "fieldPath": "events.params.items",
                    "description": "Item params must have an item_id",
                    "validationCode": "VALUE_REQUIRED",
                }
            ]
        }
        transport = RecordingTransport([httpx.Response(200, json=body)])
        report = asyncio.run(_client(transport).debug([_event()]))
        assert report.validation_messages[0].validation_code == "VALUE_REQUIRED"
        assert "/debug/mp/collect?" in transport.requests[0].url

    def test_empty_batch_returns_empty_report(self) -> None:
        transport = RecordingTransport()
        assert asyncio.run(_client(transport).debug([])) == DebugResponse()
        assert transport.call_count == 0

    def test_unparseable_body_raises_serialization_error(self) -> None:
        transport = RecordingTransport([httpx.Response(200, text="<html>oops</html>")])
        with pytest.raises(GA4Error) as exc_info:
            asyncio.run(_client(transport).debug([_event()]))
        assert exc_info.value.code is ErrorCode.SERIALIZATION
        assert "<html>oops</html>" in exc_info.value.message

    def test_wrong_shape_raises_serialization_error(self) -> None:
        transport = RecordingTransport([httpx.Response(200, json=["not", "a", "report"])])
        with pytest.raises(GA4Error) as exc_info:
            asyncio.run(_client(transport).debug([_event()]))
        assert exc_info.value.code is ErrorCode.SERIALIZATION

    def test_http_errors_keep_their_code(self) -> None:
        transport = RecordingTransport([httpx.Response(500, text="{}")])
        with pytest.raises(GA4Error) as exc_info:
            asyncio.run(_client(transport).debug([_event()]))
        assert exc_info.value.code is ErrorCode.SERVER

    def test_too_many_events(self) -> None:
        with pytest.raises(GA4Error) as exc_info:
            asyncio.run(_client(RecordingTransport()).debug([_event()] * 30))
        assert exc_info.value.code is ErrorCode.TOO_MANY_EVENTS
