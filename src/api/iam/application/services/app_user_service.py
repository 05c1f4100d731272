"""User application service for IAM bounded context."""

from __future__ import annotations

from typing import TYPE_CHECKING

from iam.domain.aggregates import AppUser
from iam.domain.value_objects import RoleId, UserId
from iam.ports.exceptions import RoleNotFoundError, UserNotFoundError
from iam.ports.repositories import IAppUserRepository, IRoleRepository

if TYPE_CHECKING:
    from infrastructure.database.unit_of_work import SqlAlchemyUnitOfWork


class AppUserService:
    """Application service for user administration.

    Role assignment checks that the role exists and is not deleted before
    the user aggregate is changed.
    """

    def __init__(
        self,
        uow: SqlAlchemyUnitOfWork,
        user_repository: IAppUserRepository,
        role_repository: IRoleRepository,
    ) -> None:
        self._uow = uow
        self._users = user_repository
        self._roles = role_repository

    async def create_user(self, identity_id: str) -> AppUser:
        """Create a user for a login identity.

        Raises:
            ValueError: If identity_id is empty
            DuplicateIdentityError: If the identity already has a user
        """
        user = AppUser.create(identity_id)
        await self._users.save(user)
        await self._uow.commit()
        return user

    async def assign_role(self, user_id: UserId, role_id: RoleId) -> AppUser:
        """Assign a role to a user.

        Raises:
            UserNotFoundError: If the user does not exist
            RoleNotFoundError: If the role does not exist or is deleted
        """
        user = await self._load(user_id)
        role = await self._roles.get_by_id(role_id)
        if role is None or role.is_deleted:
            raise RoleNotFoundError(f"Role {role_id} not found")

        user.add_role(role_id)
        await self._users.save(user)
        await self._uow.commit()
        return user

    async def unassign_role(self, user_id: UserId, role_id: RoleId) -> AppUser:
        """Remove a role from a user; removing an absent role changes nothing."""
        user = await self._load(user_id)
        user.remove_role(role_id)
        await self._users.save(user)
        await self._uow.commit()
        return user

    async def _load(self, user_id: UserId) -> AppUser:
        user = await self._users.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(f"User {user_id} not found")
        return user
