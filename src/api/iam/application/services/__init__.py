"""Application services for IAM bounded context.

Application services orchestrate domain aggregates, repositories, and
other infrastructure to fulfill use cases. They are the "front door" to
the IAM context.
"""

from iam.application.services.app_user_service import AppUserService
from iam.application.services.role_service import RoleService

__all__ = [
    "AppUserService",
    "RoleService",
]
