"""SQLAlchemy ORM models for the outbox pattern.

This module provides the database model for the outbox table used in
the transactional outbox pattern.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base
from shared_kernel.outbox.value_objects import OutboxEntry


class OutboxModel(Base):
    """ORM model for the outbox_messages table.

    Stores domain events staged at commit time until the relay has
    dispatched them to the in-process event bus.

    The partial index ix_outbox_messages_pending serves the relay's
    "pending entries in occurrence order" query without scanning
    processed history.
    """

    __tablename__ = "outbox_messages"
    __table_args__ = (
        Index(
            "ix_outbox_messages_pending",
            "occurred_on_utc",
            "id",
            postgresql_where=text("processed_on_utc IS NULL"),
            sqlite_where=text("processed_on_utc IS NULL"),
        ),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    aggregate_type: Mapped[str] = mapped_column(String(100), nullable=False)
    aggregate_id: Mapped[str] = mapped_column(String(26), nullable=False)
    event_type: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    occurred_on_utc: Mapped[datetime] = mapped_column(nullable=False)
    processed_on_utc: Mapped[datetime | None] = mapped_column(nullable=True)
    error: Mapped[str | None] = mapped_column(Text, nullable=True)

    @classmethod
    def from_value_object(cls, entry: OutboxEntry) -> "OutboxModel":
        """Build a new row from an OutboxEntry value object."""
        return cls(
            id=entry.id,
            aggregate_type=entry.aggregate_type,
            aggregate_id=entry.aggregate_id,
            event_type=entry.event_type,
            content=dict(entry.content),
            occurred_on_utc=entry.occurred_on_utc,
            processed_on_utc=entry.processed_on_utc,
            error=entry.error,
        )

    def to_value_object(self) -> OutboxEntry:
        """Convert this ORM model to an OutboxEntry value object.

        Returns:
            An immutable OutboxEntry with all fields copied from this model.
        """
        return OutboxEntry(
            id=self.id,
            aggregate_type=self.aggregate_type,
            aggregate_id=self.aggregate_id,
            event_type=self.event_type,
            content=dict(self.content),
            occurred_on_utc=self.occurred_on_utc,
            processed_on_utc=self.processed_on_utc,
            error=self.error,
        )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<OutboxModel("
            f"id={self.id}, "
            f"event_type={self.event_type}, "
            f"occurred_on_utc={self.occurred_on_utc}, "
            f"processed_on_utc={self.processed_on_utc}"
            f")>"
        )
