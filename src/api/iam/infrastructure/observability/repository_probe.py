"""Domain probe for IAM repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to role and user repository operations.
"""

from __future__ import annotations

from typing import Protocol

import structlog


class RoleRepositoryProbe(Protocol):
    """Domain probe for role repository operations.

    Records domain events during role persistence operations.
    """

    def role_saved(self, role_id: str, name: str) -> None:
        """Record that a role was successfully saved."""
        ...

    def role_retrieved(self, role_id: str, permission_count: int) -> None:
        """Record that a role was retrieved."""
        ...

    def role_not_found(self, role_id: str) -> None:
        """Record that a role was not found."""
        ...

    def duplicate_role_name(self, name: str) -> None:
        """Record that a duplicate role name was detected."""
        ...


class DefaultRoleRepositoryProbe:
    """Default implementation of RoleRepositoryProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def role_saved(self, role_id: str, name: str) -> None:
        self._logger.info("role_saved", role_id=role_id, name=name)

    def role_retrieved(self, role_id: str, permission_count: int) -> None:
        self._logger.debug(
            "role_retrieved", role_id=role_id, permission_count=permission_count
        )

    def role_not_found(self, role_id: str) -> None:
        self._logger.debug("role_not_found", role_id=role_id)

    def duplicate_role_name(self, name: str) -> None:
        self._logger.warning("duplicate_role_name", name=name)


class AppUserRepositoryProbe(Protocol):
    """Domain probe for user repository operations."""

    def user_saved(self, user_id: str, role_count: int) -> None:
        """Record that a user was successfully saved."""
        ...

    def user_retrieved(self, user_id: str) -> None:
        """Record that a user was retrieved."""
        ...

    def user_not_found(self, user_id: str) -> None:
        """Record that a user was not found."""
        ...

    def duplicate_identity(self, identity_id: str) -> None:
        """Record that a second user was attempted for one identity."""
        ...


class DefaultAppUserRepositoryProbe:
    """Default implementation of AppUserRepositoryProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def user_saved(self, user_id: str, role_count: int) -> None:
        self._logger.info("user_saved", user_id=user_id, role_count=role_count)

    def user_retrieved(self, user_id: str) -> None:
        self._logger.debug("user_retrieved", user_id=user_id)

    def user_not_found(self, user_id: str) -> None:
        self._logger.debug("user_not_found", user_id=user_id)

    def duplicate_identity(self, identity_id: str) -> None:
        self._logger.warning("duplicate_identity", identity_id=identity_id)
