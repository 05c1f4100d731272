"""SQLAlchemy implementation of IRoleRepository.

Role rows and their permission grants live in PostgreSQL. Saving a role
registers it with the unit of work, whose commit stages the role's pending
domain events in the outbox within the same transaction.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from iam.domain.aggregates import Role
from iam.domain.value_objects import PermissionId, RoleId, RoleName
from iam.infrastructure.models import RoleModel, RolePermissionModel
from iam.infrastructure.observability import (
    DefaultRoleRepositoryProbe,
    RoleRepositoryProbe,
)
from iam.ports.exceptions import DuplicateRoleNameError
from iam.ports.repositories import IRoleRepository

if TYPE_CHECKING:
    from infrastructure.database.unit_of_work import SqlAlchemyUnitOfWork


class RoleRepository(IRoleRepository):
    """Repository persisting Role aggregates through a unit of work."""

    def __init__(
        self,
        uow: SqlAlchemyUnitOfWork,
        probe: RoleRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with the unit of work it writes through.

        Args:
            uow: Unit of work owning the session and the outbox capture
            probe: Optional domain probe for observability
        """
        self._uow = uow
        self._probe = probe or DefaultRoleRepositoryProbe()

    async def save(self, role: Role) -> None:
        """Upsert role metadata and permission grants.

        The role's domain events are not written here. They are staged in
        the outbox when the unit of work commits.

        Raises:
            DuplicateRoleNameError: If another role already has the name
        """
        session = self._uow.session

        stmt = select(RoleModel.id).where(
            RoleModel.name == role.name.value, RoleModel.id != role.id.value
        )
        if (await session.execute(stmt)).first() is not None:
            self._probe.duplicate_role_name(role.name.value)
            raise DuplicateRoleNameError(f"Role '{role.name}' already exists")

        model = await session.get(RoleModel, role.id.value)
        if model is None:
            model = RoleModel(id=role.id.value, permissions=[])
            session.add(model)

        model.name = role.name.value
        model.is_default = role.is_default
        model.is_deleted = role.is_deleted
        self._sync_permissions(model, role)

        # Flush to surface constraint violations inside the caller's block
        await session.flush()

        self._uow.track(role)
        self._probe.role_saved(role.id.value, role.name.value)

    async def get_by_id(self, role_id: RoleId) -> Role | None:
        """Load a role with its permission grants.

        Args:
            role_id: The unique identifier of the role

        Returns:
            The Role aggregate, or None if not found
        """
        model = await self._uow.session.get(RoleModel, role_id.value)
        if model is None:
            self._probe.role_not_found(role_id.value)
            return None

        self._probe.role_retrieved(role_id.value, len(model.permissions))
        return self._to_domain(model)

    @staticmethod
    def _sync_permissions(model: RoleModel, role: Role) -> None:
        wanted = {p.value for p in role.permissions}
        model.permissions = [p for p in model.permissions if p.permission_id in wanted]
        present = {p.permission_id for p in model.permissions}
        for permission_id in role.permissions:
            if permission_id.value not in present:
                model.permissions.append(
                    RolePermissionModel(permission_id=permission_id.value)
                )

    @staticmethod
    def _to_domain(model: RoleModel) -> Role:
        return Role(
            id=RoleId(value=model.id),
            name=RoleName(model.name),
            is_default=model.is_default,
            permissions=sorted(
                (PermissionId(value=p.permission_id) for p in model.permissions),
                key=lambda p: p.value,
            ),
            is_deleted=model.is_deleted,
        )
