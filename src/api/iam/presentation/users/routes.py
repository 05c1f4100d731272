"""HTTP routes for user administration."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from iam.application.services import AppUserService
from iam.dependencies.user import get_app_user_service
from iam.domain.value_objects import RoleId, UserId
from iam.ports.exceptions import (
    DuplicateIdentityError,
    RoleNotFoundError,
    UserNotFoundError,
)
from iam.presentation.users.models import CreateUserRequest, UserResponse

router = APIRouter(
    prefix="/users",
    tags=["users"],
)


def _parse_ids(user_id: str, role_id: str) -> tuple[UserId, RoleId]:
    try:
        return UserId.from_string(user_id), RoleId.from_string(role_id)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    request: CreateUserRequest,
    service: Annotated[AppUserService, Depends(get_app_user_service)],
) -> UserResponse:
    """Create a user for a login identity.

    Raises:
        HTTPException: 409 if the identity already has a user
    """
    try:
        user = await service.create_user(request.identity_id)
        return UserResponse.from_domain(user)

    except DuplicateIdentityError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        ) from e


@router.put("/{user_id}/roles/{role_id}")
async def assign_role(
    user_id: str,
    role_id: str,
    service: Annotated[AppUserService, Depends(get_app_user_service)],
) -> UserResponse:
    """Assign a role to a user.

    Raises:
        HTTPException: 404 if the user or the role does not exist
    """
    try:
        user = await service.assign_role(*_parse_ids(user_id, role_id))
        return UserResponse.from_domain(user)

    except (UserNotFoundError, RoleNotFoundError) as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        ) from e


@router.delete("/{user_id}/roles/{role_id}")
async def unassign_role(
    user_id: str,
    role_id: str,
    service: Annotated[AppUserService, Depends(get_app_user_service)],
) -> UserResponse:
    """Remove a role from a user."""
    try:
        user = await service.unassign_role(*_parse_ids(user_id, role_id))
        return UserResponse.from_domain(user)

    except UserNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        ) from e
