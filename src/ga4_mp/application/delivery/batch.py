"""Application delivery – BatchAccumulator.

Buffers events and hands them to :meth:`DeliveryClient.send_with_retry`
when either the queue reaches ``batch_size`` or ``flush_interval`` seconds
pass. Delivery is at-least-once: events of a failed request stay queued, so
a later flush may resend events the endpoint already accepted.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Iterable

from ga4_mp.application.delivery.client import DeliveryClient
from ga4_mp.config.settings import BatchSettings
from ga4_mp.kernel.limits import GA4
from ga4_mp.kernel.types import Event
from ga4_mp.resilience.retry import RetryPolicy

logger = logging.getLogger(__name__)

FlushCallback = Callable[[list[Event]], None]
ErrorCallback = Callable[[Exception, list[Event]], None]


class BatchAccumulator:
    """Time- and size-windowed event queue in front of a :class:`DeliveryClient`.

    At most one flush runs at a time per instance. The ``_flushing`` flag is
    set before the first ``await`` of :meth:`flush`, so a concurrent call
    (another task, or the periodic timer) sees it and returns immediately.

    Usage::

        async with BatchAccumulator(client, batch_size=10) as batch:
            await batch.add(event)
    """

    def __init__(
        self,
        client: DeliveryClient,
        *,
        batch_size: int = GA4.BATCH_SIZE,
        flush_interval: float = GA4.FLUSH_INTERVAL,
        max_retries: int = GA4.MAX_RETRIES,
        on_flush: FlushCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self._settings = BatchSettings(
            batch_size=batch_size,
            flush_interval=flush_interval,
            max_retries=max_retries,
        )
        self._client = client
        self._on_flush = on_flush
        self._on_error = on_error

        self._queue: list[Event] = []
        self._task: asyncio.Task[None] | None = None
        self._flushing = False

    @classmethod
    def from_settings(
        cls,
        client: DeliveryClient,
        settings: BatchSettings,
        *,
        on_flush: FlushCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> "BatchAccumulator":
        return cls(
            client,
            batch_size=settings.batch_size,
            flush_interval=settings.flush_interval,
            max_retries=settings.max_retries,
            on_flush=on_flush,
            on_error=on_error,
        )

    # ------------------------------------------------------------------
    # Queue
    # ------------------------------------------------------------------

    async def add(self, event: Event) -> None:
        """Queue *event*; flush once the queue reaches ``batch_size``."""
        self._queue.append(event)
        if len(self._queue) >= self._settings.batch_size:
            await self.flush()

    async def add_many(self, events: Iterable[Event]) -> None:
        for event in events:
            await self.add(event)

    async def flush(self) -> None:
        """Send the queued events, at most ``GA4.MAX_EVENTS`` per request.

        Only the events queued when the call starts are sent. Each request
        that succeeds removes its events from the queue and is reported to
        ``on_flush``. On failure the unsent events stay queued, ``on_error``
        receives the error and the attempted events, and the error is
        re-raised.
        """
        if not self._queue or self._flushing:
            return

        self._flushing = True
        queue = self._queue
        pending = len(queue)
        try:
            # clear() swaps in a new list; stop once this one is discarded
            while pending > 0 and self._queue is queue:
                batch = queue[: min(pending, GA4.MAX_EVENTS)]
                await self._send(batch)
                del queue[: len(batch)]
                pending -= len(batch)
                logger.debug("batch.flushed events=%d remaining=%d", len(batch), len(self._queue))
                if self._on_flush is not None:
                    self._on_flush(batch)
        finally:
            self._flushing = False

    async def _send(self, batch: list[Event]) -> None:
        try:
            await self._client.send_with_retry(
                batch, RetryPolicy(max_retries=self._settings.max_retries)
            )
        except Exception as exc:
            logger.warning("batch.flush_failed events=%d exc=%r", len(batch), exc)
            if self._on_error is not None:
                self._on_error(exc, batch)
            raise

    def clear(self) -> None:
        """Drop every queued event without sending."""
        self._queue = []

    @property
    def size(self) -> int:
        return len(self._queue)

    @property
    def is_running(self) -> bool:
        return self._task is not None

    # ------------------------------------------------------------------
    # Periodic flushing
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start flushing every ``flush_interval`` seconds.

        Must be called with an event loop running; calling it again while
        running does nothing.
        """
        if self._task is not None:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        """Stop periodic flushing, then flush whatever is still queued."""
        task, self._task = self._task, None
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        await self.flush()

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._settings.flush_interval)
            try:
                await self.flush()
            except Exception as exc:
                # already reported through on_error by flush()
                logger.error("batch.periodic_flush_failed exc=%r", exc)

    async def __aenter__(self) -> "BatchAccumulator":
        self.start()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.stop()


__all__ = ["BatchAccumulator", "ErrorCallback", "FlushCallback"]
