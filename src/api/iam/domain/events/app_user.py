"""Domain events for AppUser aggregate."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AppUserCreated:
    """Event raised when an application user is created.

    Attributes:
        user_id: The ULID of the created user
        identity_id: Identifier of the user's login identity
    """

    user_id: str
    identity_id: str


@dataclass(frozen=True)
class AppUserRoleAdded:
    """Event raised when a role is assigned to a user."""

    user_id: str
    role_id: str


@dataclass(frozen=True)
class AppUserRoleRemoved:
    """Event raised when a role is unassigned from a user."""

    user_id: str
    role_id: str
