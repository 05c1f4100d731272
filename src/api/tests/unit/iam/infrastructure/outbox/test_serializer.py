"""Unit tests for IAMEventSerializer."""

import json
from typing import get_args

import pytest

from iam.domain.events import (
    AppUserRoleAdded,
    DomainEvent,
    RoleCreated,
    RoleNameUpdated,
)
from iam.infrastructure.outbox import IAMEventSerializer


class TestIAMEventSerializerRegistry:
    """Tests for the supported event registry."""

    def test_supports_every_domain_event(self):
        """The registry is derived from the DomainEvent union."""
        expected = {cls.__name__ for cls in get_args(DomainEvent)}

        assert IAMEventSerializer().supported_event_types() == expected


class TestIAMEventSerializerSerialize:
    """Tests for serialize()."""

    def test_produces_json_compatible_fields(self):
        """Content is a plain dict of the event's fields."""
        event = RoleNameUpdated(role_id="01R", old_name="A", new_name="B")

        content = IAMEventSerializer().serialize(event)

        assert content == {"role_id": "01R", "old_name": "A", "new_name": "B"}
        assert json.loads(json.dumps(content)) == content

    def test_rejects_foreign_event(self):
        """Events from other contexts are not serialized here."""

        class Foreign:
            pass

        with pytest.raises(ValueError, match="Unsupported event type: Foreign"):
            IAMEventSerializer().serialize(Foreign())  # type: ignore[arg-type]


class TestIAMEventSerializerDeserialize:
    """Tests for deserialize()."""

    def test_reconstructs_event(self):
        """Stored content decodes into an equal event."""
        event = RoleCreated(role_id="01R", name="Auditor", is_default=True)
        serializer = IAMEventSerializer()

        decoded = serializer.deserialize("RoleCreated", serializer.serialize(event))

        assert decoded == event

    def test_unknown_event_type(self):
        """A type without a decoder is rejected."""
        with pytest.raises(ValueError, match="Unsupported event type: Nope"):
            IAMEventSerializer().deserialize("Nope", {})

    def test_missing_field(self):
        """Content lacking a field is rejected."""
        with pytest.raises(TypeError, match=r"missing=\['role_id'\]"):
            IAMEventSerializer().deserialize("AppUserRoleAdded", {"user_id": "01U"})

    def test_unexpected_field(self):
        """Content with extra fields is rejected."""
        content = {"user_id": "01U", "role_id": "01R", "extra": 1}

        with pytest.raises(TypeError, match=r"unexpected=\['extra'\]"):
            IAMEventSerializer().deserialize("AppUserRoleAdded", content)

    def test_non_object_content(self):
        """Content must be a JSON object."""
        with pytest.raises(TypeError, match="must be an object"):
            IAMEventSerializer().deserialize("AppUserRoleAdded", ["01U"])  # type: ignore[arg-type]

    def test_input_is_not_mutated(self):
        """Decoding leaves the stored content untouched."""
        content = {"user_id": "01U", "role_id": "01R"}

        assert IAMEventSerializer().deserialize("AppUserRoleAdded", content) == (
            AppUserRoleAdded(user_id="01U", role_id="01R")
        )
        assert content == {"user_id": "01U", "role_id": "01R"}
