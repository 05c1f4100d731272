"""Protocols (ports) for the outbox pattern.

These protocols define the interfaces between the outbox machinery and its
collaborators: the change tracker that supplies pending domain events, the
serializer registry that encodes and decodes them, the store, and the event
bus the relay dispatches to. Each bounded context plugs in its own
serializer without shared_kernel knowing about its events.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import TYPE_CHECKING, Any, NamedTuple, Protocol, runtime_checkable

if TYPE_CHECKING:
    from shared_kernel.outbox.value_objects import OutboxEntry


class PendingDomainEvent(NamedTuple):
    """A domain event drained from an aggregate, not yet staged."""

    aggregate_type: str
    aggregate_id: str
    event: Any


@runtime_checkable
class EventSourcedAggregate(Protocol):
    """An aggregate that records domain events until they are collected."""

    @property
    def aggregate_type(self) -> str:
        """Short name of the aggregate kind (e.g., "role")."""
        ...

    @property
    def aggregate_id(self) -> str:
        """Identifier of this aggregate instance."""
        ...

    def collect_events(self) -> list[Any]:
        """Return and clear the pending domain events."""
        ...


@runtime_checkable
class PendingEventSource(Protocol):
    """Change tracker exposing the events raised since the last commit."""

    def drain_pending_events(self) -> list[PendingDomainEvent]:
        """Return every pending event and clear them from their aggregates.

        A second call with no new events in between returns an empty list.
        """
        ...


@runtime_checkable
class EventSerializer(Protocol):
    """Serializes and deserializes domain events.

    Implementations keep an explicit registry from discriminator string to
    event class, so stored content never encodes a language type identity.
    """

    def supported_event_types(self) -> frozenset[str]:
        """Return the event type names this serializer handles.

        Returns:
            Frozenset of event type names (e.g., {"RoleCreated", "RoleDeleted"})
        """
        ...

    def serialize(self, event: Any) -> dict[str, Any]:
        """Convert a domain event to a JSON-serializable dictionary.

        Raises:
            ValueError: If the event type is not supported
        """
        ...

    def deserialize(self, event_type: str, content: dict[str, Any]) -> Any:
        """Reconstruct a domain event from stored content.

        Raises:
            ValueError: If the event type is not supported
        """
        ...


@runtime_checkable
class EventPublisher(Protocol):
    """In-process event bus the relay dispatches decoded events to.

    Handlers must be idempotent: delivery is at-least-once, so an event can
    be published again if the process stops between a successful publish
    and the outcome being recorded.
    """

    async def publish(self, event: Any) -> None:
        """Publish an event and wait for all of its handlers.

        Raises:
            Exception: If any handler failed
        """
        ...


@runtime_checkable
class IOutboxRepository(Protocol):
    """Repository for outbox entry persistence.

    The repository shares the database session of its caller. It never
    commits; the caller owns the transaction boundary.
    """

    async def append(self, entries: Sequence["OutboxEntry"]) -> None:
        """Stage entries in the caller's current transaction."""
        ...

    async def fetch_pending(self, limit: int) -> list["OutboxEntry"]:
        """Fetch up to ``limit`` pending entries.

        Entries are ordered by occurred_on_utc, ties broken by id.
        """
        ...

    async def mark_processed(
        self, entry_id: str, processed_on_utc: datetime
    ) -> bool:
        """Record a successful dispatch.

        Returns:
            True if the entry was pending and is now processed
        """
        ...

    async def mark_failed(self, entry_id: str, error: str) -> bool:
        """Record a failed attempt, leaving the entry pending.

        Returns:
            True if the pending entry was updated
        """
        ...
