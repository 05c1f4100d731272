"""Domain events for Role aggregate."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RoleCreated:
    """Event raised when a new role is created.

    Attributes:
        role_id: The ULID of the created role
        name: The role name
        is_default: Whether new users receive this role automatically
    """

    role_id: str
    name: str
    is_default: bool


@dataclass(frozen=True)
class RoleNameUpdated:
    """Event raised when a role is renamed.

    Attributes:
        role_id: The ULID of the role
        old_name: The name before the change
        new_name: The name after the change
    """

    role_id: str
    old_name: str
    new_name: str


@dataclass(frozen=True)
class RolePermissionAdded:
    """Event raised when a permission is granted to a role."""

    role_id: str
    permission_id: str


@dataclass(frozen=True)
class RolePermissionRemoved:
    """Event raised when a permission is revoked from a role."""

    role_id: str
    permission_id: str


@dataclass(frozen=True)
class RoleDeleted:
    """Event raised when a role is soft-deleted."""

    role_id: str
