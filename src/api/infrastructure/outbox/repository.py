"""Outbox repository implementation.

This module provides the SQLAlchemy implementation of the outbox store. It
stages entries in the caller's transaction and serves the relay's pending
query and outcome updates.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.outbox.models import OutboxModel
from shared_kernel.outbox.value_objects import OutboxEntry


class OutboxRepository:
    """SQLAlchemy implementation of the outbox repository.

    This repository shares the same database session as its caller. Entries
    appended by a business write land in the same transaction as the
    aggregate changes, which is what makes the outbox atomic.

    The repository only calls session.add_all() and session.execute() - it
    never calls session.commit(). The caller owns the transaction boundary.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with a session.

        Args:
            session: The SQLAlchemy async session (shared with the caller)
        """
        self._session = session

    async def append(self, entries: Sequence[OutboxEntry]) -> None:
        """Stage entries in the current transaction.

        Args:
            entries: Captured outbox entries to persist
        """
        self._session.add_all(OutboxModel.from_value_object(e) for e in entries)

    async def fetch_pending(self, limit: int) -> list[OutboxEntry]:
        """Fetch pending entries in occurrence order.

        No row locks are taken. Within one process the relay never runs two
        batches at once; several relay processes against one database may
        fetch the same entries.

        Args:
            limit: Maximum number of entries to fetch

        Returns:
            Pending OutboxEntry value objects ordered by occurred_on_utc, id

        Raises:
            ValueError: If limit is not positive
        """
        if limit < 1:
            raise ValueError(f"limit must be positive, got {limit}")

        stmt = (
            select(OutboxModel)
            .where(OutboxModel.processed_on_utc.is_(None))
            .order_by(OutboxModel.occurred_on_utc, OutboxModel.id)
            .limit(limit)
        )

        result = await self._session.execute(stmt)
        models = result.scalars().all()

        return [model.to_value_object() for model in models]

    async def mark_processed(self, entry_id: str, processed_on_utc: datetime) -> bool:
        """Mark an entry as processed and clear its last error.

        The update only applies to a pending row, so an existing
        processed_on_utc is never overwritten.

        Args:
            entry_id: The id of the entry to mark as processed
            processed_on_utc: When the dispatch succeeded

        Returns:
            True if a pending row was updated
        """
        stmt = (
            update(OutboxModel)
            .where(OutboxModel.id == entry_id)
            .where(OutboxModel.processed_on_utc.is_(None))
            .values(processed_on_utc=processed_on_utc, error=None)
        )

        result = await self._session.execute(stmt)
        return result.rowcount == 1

    async def mark_failed(self, entry_id: str, error: str) -> bool:
        """Record the latest failure for a pending entry.

        The entry stays pending and is retried by a later batch.

        Args:
            entry_id: The id of the entry that failed
            error: Failure detail

        Returns:
            True if a pending row was updated
        """
        stmt = (
            update(OutboxModel)
            .where(OutboxModel.id == entry_id)
            .where(OutboxModel.processed_on_utc.is_(None))
            .values(error=error)
        )

        result = await self._session.execute(stmt)
        return result.rowcount == 1

    async def count_pending(self) -> int:
        """Count entries still awaiting a successful dispatch."""
        stmt = (
            select(func.count())
            .select_from(OutboxModel)
            .where(OutboxModel.processed_on_utc.is_(None))
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()
