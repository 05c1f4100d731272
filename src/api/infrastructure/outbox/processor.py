"""Outbox batch processor.

Reads a bounded batch of pending outbox entries, decodes each one through
the serializer registry, publishes it to the event bus and records the
outcome. Outcomes are committed one entry at a time so a crash mid-batch
never loses the successes that came before it.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.outbox.repository import OutboxRepository
from shared_kernel.outbox.exceptions import EventDecodeError
from shared_kernel.outbox.value_objects import BatchResult, OutboxEntry

if TYPE_CHECKING:
    from shared_kernel.clock import Clock
    from shared_kernel.outbox.observability import OutboxRelayProbe
    from shared_kernel.outbox.ports import EventPublisher, EventSerializer


def describe_failure(error: BaseException) -> str:
    """Format an exception for the outbox error column."""
    return f"{type(error).__name__}: {error}"


class OutboxProcessor:
    """Processes one batch of pending outbox entries.

    Entries are handled strictly sequentially in fetch order: one event is
    published and all its handlers awaited before the next one is decoded.
    A decode or handler failure affects only its own entry, which stays
    pending with the failure recorded and is retried by a later batch.

    Delivery is at-least-once. If the process stops after a successful
    publish but before the outcome commit, the entry is published again by
    the next batch.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        serializer: EventSerializer,
        publisher: EventPublisher,
        clock: Clock,
        probe: OutboxRelayProbe,
        batch_size: int = 20,
    ) -> None:
        """Initialize the processor.

        Args:
            session_factory: Factory for creating database sessions
            serializer: Decoder registry keyed by event type
            publisher: Event bus the decoded events are published to
            clock: Source of processed_on_utc timestamps
            probe: Observability probe for logging/metrics
            batch_size: Maximum entries to process per batch

        Raises:
            ValueError: If batch_size is not positive
        """
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")

        self._session_factory = session_factory
        self._serializer = serializer
        self._publisher = publisher
        self._clock = clock
        self._probe = probe
        self._batch_size = batch_size

    @property
    def batch_size(self) -> int:
        return self._batch_size

    async def process_batch(
        self, should_stop: Callable[[], bool] | None = None
    ) -> BatchResult:
        """Fetch and process one batch of pending entries.

        Args:
            should_stop: Checked before each entry; when it returns True the
                batch ends and the remaining entries stay pending

        Returns:
            Counts of fetched, processed and failed entries

        Raises:
            Exception: If the store cannot be read or an outcome cannot be
                committed. Outcomes committed before the error are kept.
        """
        async with self._session_factory() as session:
            repository = OutboxRepository(session)

            entries = await repository.fetch_pending(self._batch_size)
            # End the read transaction before dispatching anything.
            await session.commit()

            processed = 0
            failed = 0
            stopped = False

            for position, entry in enumerate(entries):
                if should_stop is not None and should_stop():
                    stopped = True
                    self._probe.batch_stopped(remaining=len(entries) - position)
                    break

                if await self._process_entry(entry, repository):
                    processed += 1
                else:
                    failed += 1
                await session.commit()

        result = BatchResult(
            fetched=len(entries),
            processed=processed,
            failed=failed,
            stopped=stopped,
        )
        self._probe.batch_processed(result.fetched, result.processed, result.failed)
        return result

    async def _process_entry(
        self, entry: OutboxEntry, repository: OutboxRepository
    ) -> bool:
        """Dispatch one entry and stage its outcome.

        Returns:
            True if the entry was published successfully
        """
        try:
            domain_event = self._decode(entry)
            await self._publisher.publish(domain_event)
        except Exception as e:
            error = describe_failure(e)
            await repository.mark_failed(entry.id, error)
            self._probe.event_processing_failed(entry.id, entry.event_type, error)
            return False

        await repository.mark_processed(entry.id, self._clock.now())
        self._probe.event_processed(entry.id, entry.event_type)
        return True

    def _decode(self, entry: OutboxEntry) -> Any:
        try:
            return self._serializer.deserialize(entry.event_type, entry.content)
        except Exception as e:
            raise EventDecodeError(entry.event_type, str(e)) from e
