"""SQLAlchemy unit of work with domain event tracking.

The unit of work tracks the aggregates modified by a business operation and
acts as the change tracker for the outbox: on commit, the outbox interceptor
drains their pending events and stages them in the same transaction.
"""

from __future__ import annotations

from types import TracebackType
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.exceptions import TransactionError
from infrastructure.outbox.capture import OutboxCommitInterceptor
from shared_kernel.outbox.ports import PendingDomainEvent

if TYPE_CHECKING:
    from infrastructure.outbox.capture import DomainEventCapture
    from shared_kernel.outbox.ports import EventSourcedAggregate


def _pending_of(aggregate: EventSourcedAggregate) -> list[PendingDomainEvent]:
    return [
        PendingDomainEvent(
            aggregate_type=aggregate.aggregate_type,
            aggregate_id=aggregate.aggregate_id,
            event=domain_event,
        )
        for domain_event in aggregate.collect_events()
    ]


class SqlAlchemyUnitOfWork:
    """Transactional boundary for business writes.

    Usage:
        async with SqlAlchemyUnitOfWork(session, capture) as uow:
            role = Role.create("Auditor")
            await RoleRepository(uow).save(role)
        # committed here, together with the RoleCreated outbox row

    Leaving the block with an exception rolls everything back, including
    any outbox rows staged by a failed commit.
    """

    def __init__(self, session: AsyncSession, capture: DomainEventCapture) -> None:
        """Initialize the unit of work.

        Args:
            session: Session owned by this unit of work
            capture: Converts pending domain events into outbox entries
        """
        self._session = session
        self._tracked: list[EventSourcedAggregate] = []
        self._interceptor = OutboxCommitInterceptor(session, self, capture)
        self._interceptor.install()
        self._closed = False

    @property
    def session(self) -> AsyncSession:
        """The session business repositories write through."""
        self._ensure_open()
        return self._session

    def track(self, aggregate: EventSourcedAggregate) -> None:
        """Register an aggregate whose events must be captured on commit.

        Instances are tracked by identity. Another instance of an already
        tracked aggregate, such as one reloaded from the repository, is
        tracked alongside the first, so neither loses its events.
        """
        self._ensure_open()
        if not any(tracked is aggregate for tracked in self._tracked):
            self._tracked.append(aggregate)

    def drain_pending_events(self) -> list[PendingDomainEvent]:
        """Collect and clear the pending events of every tracked aggregate.

        Aggregates are drained in the order they were first tracked.
        """
        pending: list[PendingDomainEvent] = []
        for aggregate in self._tracked:
            pending.extend(_pending_of(aggregate))
        return pending

    async def commit(self) -> None:
        """Commit the business change and its staged outbox entries.

        Raises:
            EventSerializationError: If a pending event could not be
                serialized; the transaction has been rolled back
        """
        self._ensure_open()
        try:
            await self._session.commit()
        except Exception:
            await self._session.rollback()
            raise

    async def rollback(self) -> None:
        """Discard the business change."""
        self._ensure_open()
        await self._session.rollback()

    def close(self) -> None:
        """Detach from the session; the unit of work cannot be reused."""
        self._interceptor.uninstall()
        self._tracked.clear()
        self._closed = True

    async def __aenter__(self) -> "SqlAlchemyUnitOfWork":
        self._ensure_open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        try:
            if exc_type is None:
                await self.commit()
            else:
                await self.rollback()
        finally:
            self.close()

    def _ensure_open(self) -> None:
        if self._closed:
            raise TransactionError("Unit of work is closed")
