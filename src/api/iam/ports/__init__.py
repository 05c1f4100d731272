"""Ports (interfaces) for IAM bounded context.

Ports define the contracts for repositories and domain services without
specifying implementation details. This allows for dependency inversion
and makes the domain layer independent of infrastructure.
"""

from iam.ports.exceptions import (
    DuplicateIdentityError,
    DuplicateRoleNameError,
    RoleNotFoundError,
    UserNotFoundError,
)
from iam.ports.repositories import IAppUserRepository, IRoleRepository

__all__ = [
    "IAppUserRepository",
    "IRoleRepository",
    "DuplicateIdentityError",
    "DuplicateRoleNameError",
    "RoleNotFoundError",
    "UserNotFoundError",
]
