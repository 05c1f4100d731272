"""Transactional outbox shared abstractions.

Domain events are staged in the outbox table inside the same transaction as
the business change that raised them, then relayed to in-process handlers by
a background worker with at-least-once delivery.
"""

from shared_kernel.outbox.exceptions import (
    EventDecodeError,
    EventDispatchError,
    EventSerializationError,
    OutboxError,
)
from shared_kernel.outbox.ports import (
    EventPublisher,
    EventSerializer,
    IOutboxRepository,
    PendingDomainEvent,
    PendingEventSource,
)
from shared_kernel.outbox.value_objects import BatchResult, OutboxEntry

__all__ = [
    "BatchResult",
    "EventDecodeError",
    "EventDispatchError",
    "EventPublisher",
    "EventSerializationError",
    "EventSerializer",
    "IOutboxRepository",
    "OutboxEntry",
    "OutboxError",
    "PendingDomainEvent",
    "PendingEventSource",
]
