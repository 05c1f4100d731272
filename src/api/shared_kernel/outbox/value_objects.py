"""Value objects for the outbox pattern.

Value objects are immutable descriptors that provide type safety and
domain semantics for outbox entries.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class OutboxEntry:
    """Represents a single entry in the outbox table.

    This is an immutable value object that captures the state of an outbox
    entry as it exists in the database. It contains all the information
    needed to decode the entry and dispatch it to the event bus.

    Attributes:
        id: ULID string, assigned at capture time
        aggregate_type: Type of aggregate that raised the event (e.g., "role")
        aggregate_id: Identifier of the aggregate
        event_type: Discriminator selecting the decoder (e.g., "RoleCreated")
        content: Serialized event data as a dictionary
        occurred_on_utc: Commit timestamp shared by every event of that commit
        processed_on_utc: When the entry was first dispatched successfully
        error: The most recent failure detail (if any)
    """

    id: str
    aggregate_type: str
    aggregate_id: str
    event_type: str
    content: dict[str, Any]
    occurred_on_utc: datetime
    processed_on_utc: datetime | None = None
    error: str | None = None

    @property
    def is_pending(self) -> bool:
        """Check if this entry still awaits a successful dispatch."""
        return self.processed_on_utc is None

    @property
    def is_processed(self) -> bool:
        """Check if this entry has been dispatched successfully."""
        return self.processed_on_utc is not None

    @property
    def has_error(self) -> bool:
        """Check if the last attempt at this entry failed."""
        return self.error is not None


@dataclass(frozen=True)
class BatchResult:
    """Outcome of a single relay batch.

    Attributes:
        fetched: Number of pending entries read from the store
        processed: Entries dispatched and marked processed
        failed: Entries whose decode or dispatch failed (still pending)
        stopped: True if a stop request ended the batch before every
            fetched entry was attempted
    """

    fetched: int = 0
    processed: int = 0
    failed: int = 0
    stopped: bool = False

    @property
    def attempted(self) -> int:
        """Number of entries that reached an outcome in this batch."""
        return self.processed + self.failed
