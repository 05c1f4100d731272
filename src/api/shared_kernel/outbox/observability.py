"""Observability probes for the outbox.

Following Domain Oriented Observability, probes capture domain-significant
events and metrics without cluttering business logic with logging concerns.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

import structlog


class EventCaptureProbe(Protocol):
    """Protocol for observability of event capture at commit time."""

    def events_captured(self, count: int, occurred_on_utc: datetime) -> None:
        """Called when pending events were staged into the outbox."""
        ...

    def event_serialization_failed(self, event_type: str, error: str) -> None:
        """Called when an event could not be serialized; the commit aborts."""
        ...


class DefaultEventCaptureProbe:
    """Default implementation using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._log = logger or structlog.get_logger().bind(component="outbox_capture")

    def events_captured(self, count: int, occurred_on_utc: datetime) -> None:
        if count > 0:
            self._log.debug(
                "outbox_events_captured",
                count=count,
                occurred_on_utc=occurred_on_utc.isoformat(),
            )

    def event_serialization_failed(self, event_type: str, error: str) -> None:
        self._log.error(
            "outbox_event_serialization_failed",
            event_type=event_type,
            error=error,
        )


class OutboxRelayProbe(Protocol):
    """Protocol for outbox relay observability.

    Implementations can log, emit metrics, or send traces.
    """

    def relay_started(self, interval_seconds: int) -> None:
        """Called when the relay starts its poll loop."""
        ...

    def relay_stopped(self) -> None:
        """Called when the relay has stopped."""
        ...

    def tick_skipped(self) -> None:
        """Called when a tick arrives while a batch is still in flight."""
        ...

    def batch_failed(self, error: str) -> None:
        """Called when a batch raised (e.g., the store was unreachable)."""
        ...

    def batch_processed(self, fetched: int, processed: int, failed: int) -> None:
        """Called when a batch completes."""
        ...

    def batch_stopped(self, remaining: int) -> None:
        """Called when a stop request ended a batch early."""
        ...

    def event_processed(self, entry_id: str, event_type: str) -> None:
        """Called when an entry is dispatched and marked processed."""
        ...

    def event_processing_failed(
        self, entry_id: str, event_type: str, error: str
    ) -> None:
        """Called when an entry fails and stays pending for a later run."""
        ...

    def serializer_registered(
        self, context_name: str, event_types: frozenset[str]
    ) -> None:
        """Called when a bounded context registers its serializer."""
        ...


class DefaultOutboxRelayProbe:
    """Default implementation using structlog.

    Logs all relay events with appropriate log levels.
    """

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        """Initialize the probe with a logger."""
        self._log = logger or structlog.get_logger().bind(component="outbox_relay")

    def relay_started(self, interval_seconds: int) -> None:
        """Log relay start."""
        self._log.info("outbox_relay_started", interval_seconds=interval_seconds)

    def relay_stopped(self) -> None:
        """Log relay stop."""
        self._log.info("outbox_relay_stopped")

    def tick_skipped(self) -> None:
        """Log a skipped tick."""
        self._log.debug("outbox_relay_tick_skipped")

    def batch_failed(self, error: str) -> None:
        """Log a batch-level failure."""
        self._log.error("outbox_batch_failed", error=error)

    def batch_processed(self, fetched: int, processed: int, failed: int) -> None:
        """Log batch processing."""
        if fetched > 0:
            self._log.info(
                "outbox_batch_processed",
                fetched=fetched,
                processed=processed,
                failed=failed,
            )

    def batch_stopped(self, remaining: int) -> None:
        """Log a batch ended by a stop request."""
        self._log.info("outbox_batch_stopped", remaining=remaining)

    def event_processed(self, entry_id: str, event_type: str) -> None:
        """Log successful event processing."""
        self._log.info(
            "outbox_event_processed",
            entry_id=entry_id,
            event_type=event_type,
        )

    def event_processing_failed(
        self, entry_id: str, event_type: str, error: str
    ) -> None:
        """Log failed event processing that will be retried."""
        self._log.warning(
            "outbox_event_processing_failed",
            entry_id=entry_id,
            event_type=event_type,
            error=error,
        )

    def serializer_registered(
        self, context_name: str, event_types: frozenset[str]
    ) -> None:
        """Log serializer plugin registration."""
        self._log.info(
            "outbox_serializer_registered",
            context=context_name,
            event_types=sorted(event_types),
            event_count=len(event_types),
        )
