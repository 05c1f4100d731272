"""Domain-Oriented Observability for IAM infrastructure.

Probes for repository operations following Domain-Oriented Observability patterns.
"""

from iam.infrastructure.observability.repository_probe import (
    AppUserRepositoryProbe,
    DefaultAppUserRepositoryProbe,
    DefaultRoleRepositoryProbe,
    RoleRepositoryProbe,
)

__all__ = [
    "AppUserRepositoryProbe",
    "DefaultAppUserRepositoryProbe",
    "RoleRepositoryProbe",
    "DefaultRoleRepositoryProbe",
]
