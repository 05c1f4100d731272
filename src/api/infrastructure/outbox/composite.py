"""Composite serializer for the outbox pattern.

Aggregates the serializers of every bounded context and routes to the
right one by event type. This is the decoder registry the relay uses: the
discriminator stored with each outbox entry selects the decoder, so stored
content never needs to name a language type.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from shared_kernel.outbox.ports import EventSerializer

if TYPE_CHECKING:
    from shared_kernel.outbox.observability import OutboxRelayProbe


class CompositeSerializer:
    """Delegates serialization to context-specific serializers.

    This class implements the EventSerializer protocol by aggregating
    multiple serializers and routing to the appropriate one based on
    the event type.
    """

    def __init__(self, probe: "OutboxRelayProbe | None" = None) -> None:
        """Initialize with an empty registry.

        Args:
            probe: Optional observability probe for logging registrations
        """
        self._type_cache: dict[str, EventSerializer] = {}
        self._probe = probe

    def register(
        self, serializer: EventSerializer, context_name: str | None = None
    ) -> None:
        """Register a context-specific serializer.

        Args:
            serializer: The serializer to register
            context_name: Optional bounded context name (defaults to class name)

        Raises:
            ValueError: If an event type is already claimed by another serializer
        """
        event_types = serializer.supported_event_types()
        clashes = sorted(
            t for t in event_types if self._type_cache.get(t, serializer) is not serializer
        )
        if clashes:
            raise ValueError(f"Event types already registered: {clashes}")

        for event_type in event_types:
            self._type_cache[event_type] = serializer

        if self._probe is not None:
            name = (
                context_name if context_name is not None else type(serializer).__name__
            )
            self._probe.serializer_registered(name, event_types)

    def supported_event_types(self) -> frozenset[str]:
        """Return all supported event types across all serializers."""
        return frozenset(self._type_cache)

    def serialize(self, event: Any) -> dict[str, Any]:
        """Serialize a domain event to a dictionary.

        Raises:
            ValueError: If no serializer is registered for the event type
        """
        return self._lookup(type(event).__name__).serialize(event)

    def deserialize(self, event_type: str, content: dict[str, Any]) -> Any:
        """Reconstruct a domain event from stored content.

        Raises:
            ValueError: If no serializer is registered for the event type
        """
        return self._lookup(event_type).deserialize(event_type, content)

    def _lookup(self, event_type: str) -> EventSerializer:
        serializer = self._type_cache.get(event_type)
        if serializer is None:
            raise ValueError(
                f"No serializer registered for event type: {event_type}. "
                f"Registered types: {sorted(self._type_cache.keys())}"
            )
        return serializer
