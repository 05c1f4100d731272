"""Domain events for IAM bounded context.

Domain events capture facts about things that have happened in the domain.
They are immutable value objects that carry all the information needed
to describe the occurrence of an event.

Aggregates record these events; the unit of work stages them in the outbox
on commit and the relay later dispatches them to in-process handlers.
"""

from iam.domain.events.app_user import (
    AppUserCreated,
    AppUserRoleAdded,
    AppUserRoleRemoved,
)
from iam.domain.events.role import (
    RoleCreated,
    RoleDeleted,
    RoleNameUpdated,
    RolePermissionAdded,
    RolePermissionRemoved,
)

# Type alias for all domain events in the IAM context
DomainEvent = (
    AppUserCreated
    | AppUserRoleAdded
    | AppUserRoleRemoved
    | RoleCreated
    | RoleNameUpdated
    | RolePermissionAdded
    | RolePermissionRemoved
    | RoleDeleted
)

__all__ = [
    # User events
    "AppUserCreated",
    "AppUserRoleAdded",
    "AppUserRoleRemoved",
    # Role events
    "RoleCreated",
    "RoleNameUpdated",
    "RolePermissionAdded",
    "RolePermissionRemoved",
    "RoleDeleted",
    # Type alias
    "DomainEvent",
]
