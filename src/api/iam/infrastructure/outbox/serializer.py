"""IAM-specific event serializer for outbox persistence.

This module provides serialization and deserialization of IAM domain events
for storage in the outbox table. Events are converted to JSON-compatible
dictionaries and reconstructed by the relay before dispatch.
"""

from __future__ import annotations

from dataclasses import asdict, fields
from typing import Any, get_args

from iam.domain.events import DomainEvent

# Derive supported events from the DomainEvent type alias
_SUPPORTED_EVENTS: frozenset[str] = frozenset(
    cls.__name__ for cls in get_args(DomainEvent)
)

# Build registry mapping event type names to classes
_EVENT_REGISTRY: dict[str, type] = {cls.__name__: cls for cls in get_args(DomainEvent)}


class IAMEventSerializer:
    """Serializes and deserializes IAM domain events.

    This serializer handles all IAM-specific events defined in the
    DomainEvent type alias. Stored content holds the event's fields only;
    the event type travels separately as the outbox entry's discriminator.
    """

    def supported_event_types(self) -> frozenset[str]:
        """Return the event type names this serializer handles."""
        return _SUPPORTED_EVENTS

    def serialize(self, event: DomainEvent) -> dict[str, Any]:
        """Convert a domain event to a JSON-serializable dictionary.

        Args:
            event: The domain event to serialize

        Returns:
            Dictionary with all event fields

        Raises:
            ValueError: If the event type is not supported
        """
        event_type = type(event).__name__
        if event_type not in _SUPPORTED_EVENTS:
            raise ValueError(f"Unsupported event type: {event_type}")

        return asdict(event)

    def deserialize(
        self,
        event_type: str,
        payload: dict[str, Any],
    ) -> Any:
        """Reconstruct a domain event from a payload.

        Args:
            event_type: The name of the event type
            payload: The serialized event data

        Returns:
            The reconstructed domain event

        Raises:
            ValueError: If the event type is not supported
            TypeError: If the payload does not match the event's fields
        """
        event_class = _EVENT_REGISTRY.get(event_type)
        if event_class is None:
            raise ValueError(f"Unsupported event type: {event_type}")

        if not isinstance(payload, dict):
            raise TypeError(
                f"{event_type} payload must be an object, "
                f"got {type(payload).__name__}"
            )

        expected = {f.name for f in fields(event_class)}
        missing = sorted(expected - payload.keys())
        unexpected = sorted(payload.keys() - expected)
        if missing or unexpected:
            raise TypeError(
                f"{event_type} payload mismatch: "
                f"missing={missing} unexpected={unexpected}"
            )

        return event_class(**payload)
