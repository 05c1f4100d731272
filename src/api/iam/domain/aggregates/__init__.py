"""Domain aggregates for IAM context.

Aggregates are the core business objects containing state and business logic.
They enforce invariants and business rules without depending on infrastructure.
"""

from iam.domain.aggregates.app_user import AppUser
from iam.domain.aggregates.role import Role

__all__ = [
    "AppUser",
    "Role",
]
