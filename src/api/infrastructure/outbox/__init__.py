"""Infrastructure layer for the outbox pattern.

Contains the SQLAlchemy model and repository, the commit-time capture of
domain events, and the processor and relay that dispatch them.
"""

from infrastructure.outbox.capture import DomainEventCapture, OutboxCommitInterceptor
from infrastructure.outbox.composite import CompositeSerializer
from infrastructure.outbox.models import OutboxModel
from infrastructure.outbox.processor import OutboxProcessor
from infrastructure.outbox.relay import OutboxRelay
from infrastructure.outbox.repository import OutboxRepository

__all__ = [
    "CompositeSerializer",
    "DomainEventCapture",
    "OutboxCommitInterceptor",
    "OutboxModel",
    "OutboxProcessor",
    "OutboxRelay",
    "OutboxRepository",
]
