"""Role aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from iam.domain.events import (
    RoleCreated,
    RoleDeleted,
    RoleNameUpdated,
    RolePermissionAdded,
    RolePermissionRemoved,
)
from iam.domain.value_objects import PermissionId, RoleId, RoleName

if TYPE_CHECKING:
    from iam.domain.events import DomainEvent


@dataclass
class Role:
    """Role aggregate grouping the permissions granted to users.

    Business rules:
    - Granting a permission the role already has is a no-op
    - Revoking a permission the role does not have is a no-op
    - A deleted role cannot be changed

    Event collection:
    - All effective mutating operations record domain events
    - Events can be collected via collect_events() for the outbox pattern
    """

    aggregate_type: ClassVar[str] = "role"

    id: RoleId
    name: RoleName
    is_default: bool = False
    permissions: list[PermissionId] = field(default_factory=list)
    is_deleted: bool = False
    _pending_events: list[DomainEvent] = field(default_factory=list, repr=False)

    @classmethod
    def create(cls, name: str, is_default: bool = False) -> "Role":
        """Factory method for creating a new role.

        Args:
            name: The name of the role
            is_default: Whether new users receive this role automatically

        Returns:
            A new Role aggregate with RoleCreated event recorded

        Raises:
            ValueError: If the name is empty or too long
        """
        role = cls(id=RoleId.generate(), name=RoleName(name), is_default=is_default)
        role._pending_events.append(
            RoleCreated(
                role_id=role.id.value,
                name=role.name.value,
                is_default=is_default,
            )
        )
        return role

    @property
    def aggregate_id(self) -> str:
        return self.id.value

    def change_name(self, new_name: str) -> None:
        """Rename the role.

        Raises:
            ValueError: If the role is deleted or the name is invalid
        """
        self._ensure_not_deleted()
        old_name = self.name
        self.name = RoleName(new_name)
        if self.name == old_name:
            return

        self._pending_events.append(
            RoleNameUpdated(
                role_id=self.id.value,
                old_name=old_name.value,
                new_name=self.name.value,
            )
        )

    def add_permission(self, permission_id: PermissionId) -> None:
        """Grant a permission to the role."""
        self._ensure_not_deleted()
        if permission_id in self.permissions:
            return

        self.permissions.append(permission_id)
        self._pending_events.append(
            RolePermissionAdded(
                role_id=self.id.value,
                permission_id=permission_id.value,
            )
        )

    def remove_permission(self, permission_id: PermissionId) -> None:
        """Revoke a permission from the role."""
        self._ensure_not_deleted()
        if permission_id not in self.permissions:
            return

        self.permissions.remove(permission_id)
        self._pending_events.append(
            RolePermissionRemoved(
                role_id=self.id.value,
                permission_id=permission_id.value,
            )
        )

    def mark_deleted(self) -> None:
        """Soft-delete the role and record RoleDeleted."""
        self._ensure_not_deleted()
        self.is_deleted = True
        self._pending_events.append(RoleDeleted(role_id=self.id.value))

    def has_permission(self, permission_id: PermissionId) -> bool:
        return permission_id in self.permissions

    def collect_events(self) -> list[DomainEvent]:
        """Return and clear pending domain events.

        This method returns all domain events that have been recorded since
        the last call to collect_events(). It clears the internal list, so
        subsequent calls will return an empty list until new events are recorded.

        Returns:
            List of pending domain events
        """
        events = self._pending_events.copy()
        self._pending_events.clear()
        return events

    def _ensure_not_deleted(self) -> None:
        if self.is_deleted:
            raise ValueError(f"Role {self.id} is deleted")
