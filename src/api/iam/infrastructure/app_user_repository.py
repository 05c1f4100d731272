"""SQLAlchemy implementation of IAppUserRepository."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from iam.domain.aggregates import AppUser
from iam.domain.value_objects import RoleId, UserId
from iam.infrastructure.models import AppUserModel, AppUserRoleModel
from iam.infrastructure.observability import (
    AppUserRepositoryProbe,
    DefaultAppUserRepositoryProbe,
)
from iam.ports.exceptions import DuplicateIdentityError
from iam.ports.repositories import IAppUserRepository

if TYPE_CHECKING:
    from infrastructure.database.unit_of_work import SqlAlchemyUnitOfWork


class AppUserRepository(IAppUserRepository):
    """Repository persisting AppUser aggregates through a unit of work.

    Role assignments are stored in app_user_roles. Assigning a role that
    does not exist fails with the database's foreign key error on flush.
    """

    def __init__(
        self,
        uow: SqlAlchemyUnitOfWork,
        probe: AppUserRepositoryProbe | None = None,
    ) -> None:
        self._uow = uow
        self._probe = probe or DefaultAppUserRepositoryProbe()

    async def save(self, user: AppUser) -> None:
        """Upsert the user and its role assignments.

        Raises:
            DuplicateIdentityError: If another user has the same identity_id
        """
        session = self._uow.session

        stmt = select(AppUserModel.id).where(
            AppUserModel.identity_id == user.identity_id,
            AppUserModel.id != user.id.value,
        )
        if (await session.execute(stmt)).first() is not None:
            self._probe.duplicate_identity(user.identity_id)
            raise DuplicateIdentityError(
                f"A user already exists for identity {user.identity_id}"
            )

        model = await session.get(AppUserModel, user.id.value)
        if model is None:
            model = AppUserModel(id=user.id.value, roles=[])
            session.add(model)

        model.identity_id = user.identity_id
        wanted = {r.value for r in user.roles}
        model.roles = [r for r in model.roles if r.role_id in wanted]
        present = {r.role_id for r in model.roles}
        for role_id in user.roles:
            if role_id.value not in present:
                model.roles.append(AppUserRoleModel(role_id=role_id.value))

        await session.flush()

        self._uow.track(user)
        self._probe.user_saved(user.id.value, len(user.roles))

    async def get_by_id(self, user_id: UserId) -> AppUser | None:
        """Load a user with its role assignments, or None if not found."""
        model = await self._uow.session.get(AppUserModel, user_id.value)
        if model is None:
            self._probe.user_not_found(user_id.value)
            return None

        self._probe.user_retrieved(user_id.value)
        return AppUser(
            id=UserId(value=model.id),
            identity_id=model.identity_id,
            roles=sorted(
                (RoleId(value=r.role_id) for r in model.roles),
                key=lambda r: r.value,
            ),
        )
