"""Unit tests for the Role aggregate."""

import pytest

from iam.domain.aggregates import Role
from iam.domain.events import (
    RoleCreated,
    RoleDeleted,
    RoleNameUpdated,
    RolePermissionAdded,
    RolePermissionRemoved,
)
from iam.domain.value_objects import PermissionId


@pytest.fixture
def role() -> Role:
    """A created role with its creation event already collected."""
    role = Role.create("Auditor")
    role.collect_events()
    return role


class TestRoleCreation:
    """Tests for Role.create()."""

    def test_create_records_role_created(self):
        """A new role announces itself."""
        role = Role.create(" Auditor ", is_default=True)

        assert role.collect_events() == [
            RoleCreated(role_id=role.id.value, name="Auditor", is_default=True)
        ]
        assert role.aggregate_type == "role"
        assert role.aggregate_id == role.id.value

    def test_create_rejects_invalid_name(self):
        """Blank names are rejected before any event is recorded."""
        with pytest.raises(ValueError):
            Role.create("  ")


class TestRoleMutations:
    """Tests for effective and redundant mutations."""

    def test_rename_records_old_and_new_name(self, role):
        """Renaming records both names."""
        role.change_name("Reviewer")

        assert role.collect_events() == [
            RoleNameUpdated(role_id=role.id.value, old_name="Auditor", new_name="Reviewer")
        ]

    def test_rename_to_same_name_records_nothing(self, role):
        """A rename that changes nothing raises no event."""
        role.change_name(" Auditor ")

        assert role.collect_events() == []

    def test_add_permission_once(self, role):
        """Granting an existing permission is a no-op."""
        permission = PermissionId.generate()

        role.add_permission(permission)
        role.add_permission(permission)

        assert role.permissions == [permission]
        assert role.collect_events() == [
            RolePermissionAdded(role_id=role.id.value, permission_id=permission.value)
        ]

    def test_remove_absent_permission_records_nothing(self, role):
        """Revoking a permission the role lacks is a no-op."""
        role.remove_permission(PermissionId.generate())

        assert role.collect_events() == []

    def test_remove_permission(self, role):
        """Revoking a granted permission records the change."""
        permission = PermissionId.generate()
        role.add_permission(permission)
        role.collect_events()

        role.remove_permission(permission)

        assert not role.has_permission(permission)
        assert role.collect_events() == [
            RolePermissionRemoved(role_id=role.id.value, permission_id=permission.value)
        ]


class TestRoleDeletion:
    """Tests for soft deletion."""

    def test_mark_deleted_records_event(self, role):
        """Deleting records RoleDeleted."""
        role.mark_deleted()

        assert role.is_deleted
        assert role.collect_events() == [RoleDeleted(role_id=role.id.value)]

    def test_deleted_role_rejects_changes(self, role):
        """A deleted role cannot be modified or deleted again."""
        role.mark_deleted()

        with pytest.raises(ValueError, match="is deleted"):
            role.change_name("Other")
        with pytest.raises(ValueError, match="is deleted"):
            role.add_permission(PermissionId.generate())
        with pytest.raises(ValueError, match="is deleted"):
            role.mark_deleted()


class TestRoleEventCollection:
    """Tests for collect_events()."""

    def test_collect_clears_pending_events(self):
        """Events are handed out once."""
        role = Role.create("Auditor")

        assert len(role.collect_events()) == 1
        assert role.collect_events() == []

    def test_events_keep_raise_order(self):
        """Events come back in the order they were raised."""
        role = Role.create("Auditor")
        role.change_name("Reviewer")
        role.mark_deleted()

        assert [type(e) for e in role.collect_events()] == [
            RoleCreated,
            RoleNameUpdated,
            RoleDeleted,
        ]
