"""In-process handlers for IAM domain events.

The relay publishes every decoded outbox entry to the event bus. These
handlers are the IAM subscribers: they write the audit trail of role and
user administration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from iam.application.observability import (
    DefaultIAMEventHandlerProbe,
    IAMEventHandlerProbe,
)
from iam.domain.events import (
    AppUserCreated,
    AppUserRoleAdded,
    AppUserRoleRemoved,
    RoleCreated,
    RoleDeleted,
    RoleNameUpdated,
    RolePermissionAdded,
    RolePermissionRemoved,
)

if TYPE_CHECKING:
    from infrastructure.events import InProcessEventBus


class IAMAuditHandlers:
    """Audit trail subscribers for IAM events."""

    def __init__(self, probe: IAMEventHandlerProbe | None = None) -> None:
        self._probe = probe or DefaultIAMEventHandlerProbe()

    async def on_role_created(self, event: RoleCreated) -> None:
        self._probe.role_audited(
            "created", event.role_id, name=event.name, is_default=event.is_default
        )

    async def on_role_name_updated(self, event: RoleNameUpdated) -> None:
        self._probe.role_audited(
            "renamed", event.role_id, old_name=event.old_name, new_name=event.new_name
        )

    async def on_role_permission_added(self, event: RolePermissionAdded) -> None:
        self._probe.role_audited(
            "permission_added", event.role_id, permission_id=event.permission_id
        )

    async def on_role_permission_removed(self, event: RolePermissionRemoved) -> None:
        self._probe.role_audited(
            "permission_removed", event.role_id, permission_id=event.permission_id
        )

    async def on_role_deleted(self, event: RoleDeleted) -> None:
        self._probe.role_audited("deleted", event.role_id)

    async def on_app_user_created(self, event: AppUserCreated) -> None:
        self._probe.user_audited(
            "created", event.user_id, identity_id=event.identity_id
        )

    async def on_app_user_role_added(self, event: AppUserRoleAdded) -> None:
        self._probe.user_audited("role_added", event.user_id, role_id=event.role_id)

    async def on_app_user_role_removed(self, event: AppUserRoleRemoved) -> None:
        self._probe.user_audited("role_removed", event.user_id, role_id=event.role_id)


def register_iam_event_handlers(
    bus: InProcessEventBus, probe: IAMEventHandlerProbe | None = None
) -> IAMAuditHandlers:
    """Subscribe the IAM audit handlers to every IAM event type.

    Returns:
        The handler instance, so callers can inspect or reuse it
    """
    handlers = IAMAuditHandlers(probe)
    bus.register(RoleCreated, handlers.on_role_created)
    bus.register(RoleNameUpdated, handlers.on_role_name_updated)
    bus.register(RolePermissionAdded, handlers.on_role_permission_added)
    bus.register(RolePermissionRemoved, handlers.on_role_permission_removed)
    bus.register(RoleDeleted, handlers.on_role_deleted)
    bus.register(AppUserCreated, handlers.on_app_user_created)
    bus.register(AppUserRoleAdded, handlers.on_app_user_role_added)
    bus.register(AppUserRoleRemoved, handlers.on_app_user_role_removed)
    return handlers
