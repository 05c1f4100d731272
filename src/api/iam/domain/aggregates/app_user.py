"""AppUser aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from iam.domain.events import AppUserCreated, AppUserRoleAdded, AppUserRoleRemoved
from iam.domain.value_objects import RoleId, UserId

if TYPE_CHECKING:
    from iam.domain.events import DomainEvent


@dataclass
class AppUser:
    """Application user administered through the backend.

    The login identity lives with the authentication provider; this aggregate
    holds the user's role assignments.

    Event collection:
    - All effective mutating operations record domain events
    - Events can be collected via collect_events() for the outbox pattern
    """

    aggregate_type: ClassVar[str] = "app_user"

    id: UserId
    identity_id: str
    roles: list[RoleId] = field(default_factory=list)
    _pending_events: list[DomainEvent] = field(default_factory=list, repr=False)

    @classmethod
    def create(cls, identity_id: str) -> "AppUser":
        """Factory method for creating a new user.

        Args:
            identity_id: Identifier of the user's login identity

        Returns:
            A new AppUser aggregate with AppUserCreated event recorded

        Raises:
            ValueError: If identity_id is empty
        """
        if not identity_id:
            raise ValueError("identity_id must not be empty")

        user = cls(id=UserId.generate(), identity_id=identity_id)
        user._pending_events.append(
            AppUserCreated(user_id=user.id.value, identity_id=identity_id)
        )
        return user

    @property
    def aggregate_id(self) -> str:
        return self.id.value

    def add_role(self, role_id: RoleId) -> None:
        """Assign a role; assigning a role the user already has is a no-op."""
        if role_id in self.roles:
            return

        self.roles.append(role_id)
        self._pending_events.append(
            AppUserRoleAdded(user_id=self.id.value, role_id=role_id.value)
        )

    def remove_role(self, role_id: RoleId) -> None:
        """Unassign a role; removing a role the user lacks is a no-op."""
        if role_id not in self.roles:
            return

        self.roles.remove(role_id)
        self._pending_events.append(
            AppUserRoleRemoved(user_id=self.id.value, role_id=role_id.value)
        )

    def collect_events(self) -> list[DomainEvent]:
        """Return and clear pending domain events."""
        events = self._pending_events.copy()
        self._pending_events.clear()
        return events
