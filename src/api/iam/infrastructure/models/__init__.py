"""SQLAlchemy ORM models for IAM bounded context.

These models map to database tables and are used by repository implementations.
"""

from iam.infrastructure.models.app_user import AppUserModel, AppUserRoleModel
from iam.infrastructure.models.role import RoleModel, RolePermissionModel

__all__ = [
    "AppUserModel",
    "AppUserRoleModel",
    "RoleModel",
    "RolePermissionModel",
]
