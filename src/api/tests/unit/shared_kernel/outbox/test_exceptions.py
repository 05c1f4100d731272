"""Unit tests for outbox exceptions."""

from shared_kernel.outbox.exceptions import (
    EventDecodeError,
    EventDispatchError,
    EventSerializationError,
    OutboxError,
)


class TestOutboxExceptions:
    """Tests for exception messages and attributes."""

    def test_serialization_error_carries_event_type(self):
        """The event type and reason are kept for callers."""
        error = EventSerializationError("RoleCreated", "bad field")

        assert isinstance(error, OutboxError)
        assert error.event_type == "RoleCreated"
        assert error.reason == "bad field"
        assert "RoleCreated" in str(error)

    def test_decode_error_message(self):
        """The decode error names the event type."""
        error = EventDecodeError("Unknown", "no decoder")

        assert str(error) == "Cannot decode event Unknown: no decoder"

    def test_dispatch_error_lists_every_failure(self):
        """All handler failures appear in the message."""
        failures = [RuntimeError("first"), ValueError("second")]

        error = EventDispatchError("RoleCreated", failures)

        assert error.failures == failures
        assert str(error) == (
            "2 handler(s) failed for RoleCreated: "
            "RuntimeError: first; ValueError: second"
        )
