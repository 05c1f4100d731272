from typing import Annotated

from fastapi import Depends

from iam.application.services import AppUserService
from iam.dependencies.outbox import get_unit_of_work
from iam.dependencies.role import get_role_repository
from iam.infrastructure.app_user_repository import AppUserRepository
from iam.infrastructure.role_repository import RoleRepository
from infrastructure.database.unit_of_work import SqlAlchemyUnitOfWork


def get_app_user_repository(
    uow: Annotated[SqlAlchemyUnitOfWork, Depends(get_unit_of_work)],
) -> AppUserRepository:
    """Get AppUserRepository instance.

    Args:
        uow: Unit of work for the current request

    Returns:
        AppUserRepository writing through the request's unit of work
    """
    return AppUserRepository(uow=uow)


def get_app_user_service(
    uow: Annotated[SqlAlchemyUnitOfWork, Depends(get_unit_of_work)],
    users: Annotated[AppUserRepository, Depends(get_app_user_repository)],
    roles: Annotated[RoleRepository, Depends(get_role_repository)],
) -> AppUserService:
    """Get AppUserService instance.

    Args:
        uow: Unit of work for the current request
        users: User repository
        roles: Role repository used to validate assignments

    Returns:
        AppUserService instance
    """
    return AppUserService(uow=uow, user_repository=users, role_repository=roles)
