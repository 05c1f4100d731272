"""Exceptions raised by the outbox machinery."""

from __future__ import annotations


class OutboxError(Exception):
    """Base exception for outbox operations."""

    pass


class EventSerializationError(OutboxError):
    """Raised when a domain event cannot be serialized at capture time.

    This error aborts the enclosing commit: neither the business change nor
    any outbox row is persisted.
    """

    def __init__(self, event_type: str, reason: str) -> None:
        super().__init__(f"Cannot serialize event {event_type}: {reason}")
        self.event_type = event_type
        self.reason = reason


class EventDecodeError(OutboxError):
    """Raised when stored content cannot be decoded into a domain event."""

    def __init__(self, event_type: str, reason: str) -> None:
        super().__init__(f"Cannot decode event {event_type}: {reason}")
        self.event_type = event_type
        self.reason = reason


class EventDispatchError(OutboxError):
    """Raised when one or more handlers fail for a published event."""

    def __init__(self, event_type: str, failures: list[BaseException]) -> None:
        details = "; ".join(f"{type(f).__name__}: {f}" for f in failures)
        super().__init__(
            f"{len(failures)} handler(s) failed for {event_type}: {details}"
        )
        self.event_type = event_type
        self.failures = failures
