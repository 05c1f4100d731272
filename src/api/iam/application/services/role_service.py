"""Role application service for IAM bounded context.

Each use case loads or creates a Role aggregate, applies the change and
commits the unit of work. The commit persists the role together with the
outbox entries for the events the change raised.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from iam.domain.aggregates import Role
from iam.domain.value_objects import PermissionId, RoleId
from iam.ports.exceptions import RoleNotFoundError
from iam.ports.repositories import IRoleRepository

if TYPE_CHECKING:
    from infrastructure.database.unit_of_work import SqlAlchemyUnitOfWork


class RoleService:
    """Application service for role management."""

    def __init__(
        self,
        uow: SqlAlchemyUnitOfWork,
        role_repository: IRoleRepository,
    ) -> None:
        """Initialize RoleService with dependencies.

        Args:
            uow: Unit of work that commits each use case
            role_repository: Repository for role persistence
        """
        self._uow = uow
        self._roles = role_repository

    async def create_role(self, name: str, is_default: bool = False) -> Role:
        """Create a role.

        Raises:
            ValueError: If the name is invalid
            DuplicateRoleNameError: If the name is taken
        """
        role = Role.create(name, is_default=is_default)
        await self._roles.save(role)
        await self._uow.commit()
        return role

    async def rename_role(self, role_id: RoleId, new_name: str) -> Role:
        """Rename a role.

        Raises:
            RoleNotFoundError: If the role does not exist
            DuplicateRoleNameError: If the name is taken
        """
        role = await self._load(role_id)
        role.change_name(new_name)
        await self._roles.save(role)
        await self._uow.commit()
        return role

    async def grant_permission(
        self, role_id: RoleId, permission_id: PermissionId
    ) -> Role:
        """Grant a permission; granting one the role has changes nothing."""
        role = await self._load(role_id)
        role.add_permission(permission_id)
        await self._roles.save(role)
        await self._uow.commit()
        return role

    async def revoke_permission(
        self, role_id: RoleId, permission_id: PermissionId
    ) -> Role:
        """Revoke a permission; revoking one the role lacks changes nothing."""
        role = await self._load(role_id)
        role.remove_permission(permission_id)
        await self._roles.save(role)
        await self._uow.commit()
        return role

    async def delete_role(self, role_id: RoleId) -> None:
        """Soft-delete a role.

        Raises:
            RoleNotFoundError: If the role does not exist
            ValueError: If the role is already deleted
        """
        role = await self._load(role_id)
        role.mark_deleted()
        await self._roles.save(role)
        await self._uow.commit()

    async def _load(self, role_id: RoleId) -> Role:
        role = await self._roles.get_by_id(role_id)
        if role is None:
            raise RoleNotFoundError(f"Role {role_id} not found")
        return role
