"""Repository protocols (ports) for IAM bounded context.

Repository protocols define the interface for persisting and retrieving
aggregates. Saving an aggregate also registers it with the unit of work so
that its domain events reach the outbox in the same transaction.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from iam.domain.aggregates import AppUser, Role
from iam.domain.value_objects import RoleId, UserId


@runtime_checkable
class IRoleRepository(Protocol):
    """Repository for Role aggregate persistence."""

    async def save(self, role: Role) -> None:
        """Persist a role aggregate.

        Creates a new role or updates an existing one. Pending domain events
        are staged in the outbox when the unit of work commits.

        Raises:
            DuplicateRoleNameError: If another role already has the name
        """
        ...

    async def get_by_id(self, role_id: RoleId) -> Role | None:
        """Retrieve a role by its ID, or None if not found."""
        ...


@runtime_checkable
class IAppUserRepository(Protocol):
    """Repository for AppUser aggregate persistence."""

    async def save(self, user: AppUser) -> None:
        """Persist a user aggregate and its role assignments.

        Raises:
            DuplicateIdentityError: If another user has the same identity_id
        """
        ...

    async def get_by_id(self, user_id: UserId) -> AppUser | None:
        """Retrieve a user by its ID, or None if not found."""
        ...
