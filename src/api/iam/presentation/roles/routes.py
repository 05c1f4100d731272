"""HTTP routes for role management."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status

from iam.application.services import RoleService
from iam.dependencies.role import get_role_service
from iam.domain.value_objects import PermissionId, RoleId
from iam.ports.exceptions import DuplicateRoleNameError, RoleNotFoundError
from iam.presentation.roles.models import (
    CreateRoleRequest,
    RoleResponse,
    UpdateRoleRequest,
)

router = APIRouter(
    prefix="/roles",
    tags=["roles"],
)


def _parse_role_id(role_id: str) -> RoleId:
    try:
        return RoleId.from_string(role_id)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid role ID format: {role_id}",
        ) from e


def _parse_permission_id(permission_id: str) -> PermissionId:
    try:
        return PermissionId.from_string(permission_id)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid permission ID format: {permission_id}",
        ) from e


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_role(
    request: CreateRoleRequest,
    service: Annotated[RoleService, Depends(get_role_service)],
) -> RoleResponse:
    """Create a new role.

    Raises:
        HTTPException: 400 if the name is blank after trimming
        HTTPException: 409 if a role with the name already exists
    """
    try:
        role = await service.create_role(request.name, is_default=request.is_default)
        return RoleResponse.from_domain(role)

    except DuplicateRoleNameError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A role with this name already exists",
        ) from e
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e


@router.patch("/{role_id}")
async def rename_role(
    role_id: str,
    request: UpdateRoleRequest,
    service: Annotated[RoleService, Depends(get_role_service)],
) -> RoleResponse:
    """Rename a role.

    Raises:
        HTTPException: 404 if the role does not exist
        HTTPException: 409 if the name is taken or the role is deleted
    """
    try:
        role = await service.rename_role(_parse_role_id(role_id), request.name)
        return RoleResponse.from_domain(role)

    except RoleNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        ) from e
    except DuplicateRoleNameError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A role with this name already exists",
        ) from e
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        ) from e


@router.put("/{role_id}/permissions/{permission_id}")
async def grant_permission(
    role_id: str,
    permission_id: str,
    service: Annotated[RoleService, Depends(get_role_service)],
) -> RoleResponse:
    """Grant a permission to a role."""
    try:
        role = await service.grant_permission(
            _parse_role_id(role_id), _parse_permission_id(permission_id)
        )
        return RoleResponse.from_domain(role)

    except RoleNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        ) from e
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        ) from e


@router.delete("/{role_id}/permissions/{permission_id}")
async def revoke_permission(
    role_id: str,
    permission_id: str,
    service: Annotated[RoleService, Depends(get_role_service)],
) -> RoleResponse:
    """Revoke a permission from a role."""
    try:
        role = await service.revoke_permission(
            _parse_role_id(role_id), _parse_permission_id(permission_id)
        )
        return RoleResponse.from_domain(role)

    except RoleNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        ) from e
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        ) from e


@router.delete("/{role_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_role(
    role_id: str,
    service: Annotated[RoleService, Depends(get_role_service)],
) -> Response:
    """Soft-delete a role."""
    try:
        await service.delete_role(_parse_role_id(role_id))
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    except RoleNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        ) from e
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        ) from e
