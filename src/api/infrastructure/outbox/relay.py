"""Outbox relay: runs the batch processor on a fixed interval.

The relay runs as a background task within the FastAPI application. At most
one batch is in flight per process: a tick that arrives while a batch is
still running is skipped, not queued.
"""

from __future__ import annotations

import asyncio
import contextlib
from typing import TYPE_CHECKING

from infrastructure.outbox.processor import describe_failure
from shared_kernel.outbox.value_objects import BatchResult

if TYPE_CHECKING:
    from infrastructure.outbox.processor import OutboxProcessor
    from shared_kernel.outbox.observability import OutboxRelayProbe


class OutboxRelay:
    """Periodic scheduler for the outbox processor.

    Every ``interval_seconds`` the poll loop starts a batch unless one is
    already running. The busy flag is checked and set without yielding to the
    event loop, so two ticks can never both start a batch.

    A batch that raises (for example because the database is unreachable) is
    logged through the probe and the next tick proceeds normally. Stopping
    lets the in-flight batch finish its current entry; no handler is ever
    cancelled midway.
    """

    def __init__(
        self,
        processor: OutboxProcessor,
        probe: OutboxRelayProbe,
        interval_seconds: int = 10,
    ) -> None:
        """Initialize the relay.

        Args:
            processor: Batch processor invoked on every tick
            probe: Observability probe for logging/metrics
            interval_seconds: Seconds between ticks

        Raises:
            ValueError: If interval_seconds is not positive
        """
        if interval_seconds < 1:
            raise ValueError(
                f"interval_seconds must be positive, got {interval_seconds}"
            )

        self._processor = processor
        self._probe = probe
        self._interval = interval_seconds
        self._busy = False
        self._stop_requested = False
        self._loop_task: asyncio.Task[None] | None = None
        self._batch_task: asyncio.Task[BatchResult | None] | None = None

    @property
    def is_running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    @property
    def is_busy(self) -> bool:
        return self._busy

    async def start(self) -> None:
        """Start the poll loop; the first tick happens immediately."""
        if self.is_running:
            return
        self._stop_requested = False
        self._loop_task = asyncio.create_task(self._poll_loop())
        self._probe.relay_started(self._interval)

    async def stop(self) -> None:
        """Gracefully stop the relay.

        Cancels the poll loop, then waits for the in-flight batch, which
        stops before its next entry. Afterwards run_once() and start()
        process entries normally again.
        """
        self._stop_requested = True

        if self._loop_task is not None:
            self._loop_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._loop_task
            self._loop_task = None

        if self._batch_task is not None:
            await self._batch_task
            self._batch_task = None

        self._stop_requested = False
        self._probe.relay_stopped()

    async def run_once(self) -> BatchResult | None:
        """Run one batch now unless another batch is in flight.

        Returns:
            The batch result, or None if the run was skipped or failed
        """
        if not self._try_acquire():
            return None
        return await self._run_batch()

    def _try_acquire(self) -> bool:
        if self._busy:
            self._probe.tick_skipped()
            return False
        self._busy = True
        return True

    async def _run_batch(self) -> BatchResult | None:
        try:
            return await self._processor.process_batch(
                should_stop=self._should_stop
            )
        except Exception as e:
            self._probe.batch_failed(describe_failure(e))
            return None
        finally:
            self._busy = False

    def _should_stop(self) -> bool:
        return self._stop_requested

    def _tick(self) -> None:
        if self._try_acquire():
            self._batch_task = asyncio.create_task(self._run_batch())

    async def _poll_loop(self) -> None:
        while not self._stop_requested:
            self._tick()
            await asyncio.sleep(self._interval)
