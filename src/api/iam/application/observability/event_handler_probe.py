"""Protocol for IAM event handler observability.

The handlers run on the relay after an outbox entry is decoded. They keep an
audit trail of administrative changes as structured log lines.
"""

from __future__ import annotations

from typing import Any, Protocol

import structlog


class IAMEventHandlerProbe(Protocol):
    """Domain probe for IAM audit events."""

    def role_audited(self, action: str, role_id: str, **details: Any) -> None:
        """Record an audit entry for a role change."""
        ...

    def user_audited(self, action: str, user_id: str, **details: Any) -> None:
        """Record an audit entry for a user change."""
        ...


class DefaultIAMEventHandlerProbe:
    """Default implementation of IAMEventHandlerProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger().bind(component="iam_audit")

    def role_audited(self, action: str, role_id: str, **details: Any) -> None:
        self._logger.info("role_audited", action=action, role_id=role_id, **details)

    def user_audited(self, action: str, user_id: str, **details: Any) -> None:
        self._logger.info("user_audited", action=action, user_id=user_id, **details)
