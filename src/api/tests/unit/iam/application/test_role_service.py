"""Unit tests for RoleService."""

from unittest.mock import AsyncMock, create_autospec

import pytest

from iam.application.services import RoleService
from iam.domain.aggregates import Role
from iam.domain.events import RoleCreated, RoleNameUpdated, RolePermissionAdded
from iam.domain.value_objects import PermissionId, RoleId
from iam.ports.exceptions import DuplicateRoleNameError, RoleNotFoundError
from iam.ports.repositories import IRoleRepository


@pytest.fixture
def mock_uow():
    uow = AsyncMock()
    return uow


@pytest.fixture
def mock_role_repository():
    return create_autospec(IRoleRepository, instance=True)


@pytest.fixture
def service(mock_uow, mock_role_repository):
    return RoleService(uow=mock_uow, role_repository=mock_role_repository)


def _existing_role(name: str = "Auditor") -> Role:
    role = Role.create(name)
    role.collect_events()
    return role


class TestCreateRole:
    """Tests for RoleService.create_role()."""

    @pytest.mark.asyncio
    async def test_saves_and_commits(self, service, mock_uow, mock_role_repository):
        """The new role is saved with its creation event, then committed."""
        role = await service.create_role("Auditor", is_default=True)

        mock_role_repository.save.assert_awaited_once_with(role)
        mock_uow.commit.assert_awaited_once()
        events = role.collect_events()
        assert events == [
            RoleCreated(role_id=role.id.value, name="Auditor", is_default=True)
        ]

    @pytest.mark.asyncio
    async def test_duplicate_name_does_not_commit(
        self, service, mock_uow, mock_role_repository
    ):
        mock_role_repository.save.side_effect = DuplicateRoleNameError("taken")

        with pytest.raises(DuplicateRoleNameError):
            await service.create_role("Auditor")

        mock_uow.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_name_raises_value_error(self, service, mock_role_repository):
        with pytest.raises(ValueError):
            await service.create_role("")

        mock_role_repository.save.assert_not_awaited()


class TestChangeRole:
    """Tests for the rename, grant, revoke and delete use cases."""

    @pytest.mark.asyncio
    async def test_rename(self, service, mock_uow, mock_role_repository):
        role = _existing_role()
        mock_role_repository.get_by_id.return_value = role

        await service.rename_role(role.id, "Reviewer")

        assert role.collect_events() == [
            RoleNameUpdated(
                role_id=role.id.value, old_name="Auditor", new_name="Reviewer"
            )
        ]
        mock_role_repository.save.assert_awaited_once_with(role)
        mock_uow.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_grant_permission(self, service, mock_role_repository):
        role = _existing_role()
        permission_id = PermissionId.generate()
        mock_role_repository.get_by_id.return_value = role

        await service.grant_permission(role.id, permission_id)

        assert role.permissions == [permission_id]
        assert role.collect_events() == [
            RolePermissionAdded(
                role_id=role.id.value, permission_id=permission_id.value
            )
        ]

    @pytest.mark.asyncio
    async def test_revoke_missing_permission_records_nothing(
        self, service, mock_role_repository
    ):
        role = _existing_role()
        mock_role_repository.get_by_id.return_value = role

        await service.revoke_permission(role.id, PermissionId.generate())

        assert role.collect_events() == []

    @pytest.mark.asyncio
    async def test_delete(self, service, mock_uow, mock_role_repository):
        role = _existing_role()
        mock_role_repository.get_by_id.return_value = role

        await service.delete_role(role.id)

        assert role.is_deleted is True
        mock_uow.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unknown_role_raises_not_found(
        self, service, mock_uow, mock_role_repository
    ):
        mock_role_repository.get_by_id.return_value = None

        with pytest.raises(RoleNotFoundError):
            await service.rename_role(RoleId.generate(), "Reviewer")

        mock_uow.commit.assert_not_awaited()
