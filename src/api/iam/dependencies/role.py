from typing import Annotated

from fastapi import Depends

from iam.application.services import RoleService
from iam.dependencies.outbox import get_unit_of_work
from iam.infrastructure.role_repository import RoleRepository
from infrastructure.database.unit_of_work import SqlAlchemyUnitOfWork


def get_role_repository(
    uow: Annotated[SqlAlchemyUnitOfWork, Depends(get_unit_of_work)],
) -> RoleRepository:
    """Get RoleRepository instance.

    Args:
        uow: Unit of work for the current request

    Returns:
        RoleRepository writing through the request's unit of work
    """
    return RoleRepository(uow=uow)


def get_role_service(
    uow: Annotated[SqlAlchemyUnitOfWork, Depends(get_unit_of_work)],
    repository: Annotated[RoleRepository, Depends(get_role_repository)],
) -> RoleService:
    """Get RoleService instance.

    Args:
        uow: Unit of work for the current request
        repository: Role repository sharing the same unit of work

    Returns:
        RoleService instance
    """
    return RoleService(uow=uow, role_repository=repository)
