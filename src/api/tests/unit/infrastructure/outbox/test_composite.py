"""Unit tests for CompositeSerializer.

These tests verify routing by event type, clash detection and the
observability probe calls made on registration.
"""

from unittest.mock import Mock

import pytest

from infrastructure.outbox.composite import CompositeSerializer
from shared_kernel.outbox.observability import OutboxRelayProbe


class MockSerializer:
    """Mock serializer for testing."""

    def __init__(self, event_types: frozenset[str]):
        self._event_types = event_types
        self.deserialized: list[tuple[str, dict]] = []

    def supported_event_types(self) -> frozenset[str]:
        return self._event_types

    def serialize(self, event) -> dict:
        return {"serialized_by": type(self).__name__, "value": event.value}

    def deserialize(self, event_type: str, content: dict):
        self.deserialized.append((event_type, content))
        return (event_type, content)


class Event1:
    def __init__(self, value: str):
        self.value = value


class TestCompositeSerializerRouting:
    """Tests for routing to the registered serializer."""

    def test_serialize_routes_by_class_name(self):
        """serialize uses the serializer that claims the event's type."""
        composite = CompositeSerializer()
        composite.register(MockSerializer(frozenset({"Event1"})))

        assert composite.serialize(Event1("x")) == {
            "serialized_by": "MockSerializer",
            "value": "x",
        }

    def test_deserialize_routes_by_discriminator(self):
        """deserialize selects the decoder by the stored event type."""
        composite = CompositeSerializer()
        first = MockSerializer(frozenset({"A"}))
        second = MockSerializer(frozenset({"B"}))
        composite.register(first)
        composite.register(second)

        composite.deserialize("B", {"k": 1})

        assert first.deserialized == []
        assert second.deserialized == [("B", {"k": 1})]

    def test_unknown_event_type_raises(self):
        """An unregistered type is rejected with the known types listed."""
        composite = CompositeSerializer()
        composite.register(MockSerializer(frozenset({"A"})))

        with pytest.raises(ValueError, match="No serializer registered for event type: Z"):
            composite.deserialize("Z", {})

    def test_supported_event_types_is_union(self):
        """All registered types are reported."""
        composite = CompositeSerializer()
        composite.register(MockSerializer(frozenset({"A", "B"})))
        composite.register(MockSerializer(frozenset({"C"})))

        assert composite.supported_event_types() == frozenset({"A", "B", "C"})


class TestCompositeSerializerRegistration:
    """Tests for registration rules."""

    def test_clashing_event_type_is_rejected(self):
        """Two serializers cannot claim the same event type."""
        composite = CompositeSerializer()
        composite.register(MockSerializer(frozenset({"A", "B"})))

        with pytest.raises(ValueError, match=r"already registered: \['B'\]"):
            composite.register(MockSerializer(frozenset({"B", "C"})))

        assert composite.supported_event_types() == frozenset({"A", "B"})

    def test_reregistering_same_serializer_is_allowed(self):
        """Registering one instance twice is idempotent."""
        composite = CompositeSerializer()
        serializer = MockSerializer(frozenset({"A"}))

        composite.register(serializer)
        composite.register(serializer)

        assert composite.supported_event_types() == frozenset({"A"})


class TestCompositeSerializerObservability:
    """Tests for CompositeSerializer probe integration."""

    def test_register_calls_probe_with_context_name(self):
        """register should call probe.serializer_registered with context name."""
        probe = Mock(spec=OutboxRelayProbe)
        composite = CompositeSerializer(probe=probe)

        composite.register(
            MockSerializer(frozenset({"RoleCreated", "RoleDeleted"})),
            context_name="iam",
        )

        probe.serializer_registered.assert_called_once_with(
            "iam", frozenset({"RoleCreated", "RoleDeleted"})
        )

    def test_register_without_context_name_uses_class_name(self):
        """register without context_name should use serializer class name."""
        probe = Mock(spec=OutboxRelayProbe)
        composite = CompositeSerializer(probe=probe)

        composite.register(MockSerializer(frozenset({"SimpleEvent"})))

        probe.serializer_registered.assert_called_once_with(
            "MockSerializer", frozenset({"SimpleEvent"})
        )

    def test_register_without_probe_does_not_raise(self):
        """register without probe should work normally."""
        composite = CompositeSerializer()

        composite.register(MockSerializer(frozenset({"Event1"})))
