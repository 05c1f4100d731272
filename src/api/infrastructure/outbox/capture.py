"""Domain event capture for the transactional outbox.

Pending domain events are converted to outbox rows just before a session
commits, inside the same transaction as the business change. The hook is a
SQLAlchemy ``before_commit`` listener, so any commit of the session stages
the events, whether it goes through a unit of work or not.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session
from ulid import ULID

from infrastructure.outbox.models import OutboxModel
from shared_kernel.outbox.exceptions import EventSerializationError
from shared_kernel.outbox.observability import DefaultEventCaptureProbe
from shared_kernel.outbox.value_objects import OutboxEntry

if TYPE_CHECKING:
    from shared_kernel.clock import Clock
    from shared_kernel.outbox.observability import EventCaptureProbe
    from shared_kernel.outbox.ports import (
        EventSerializer,
        PendingDomainEvent,
        PendingEventSource,
    )


def _sequential_ids(count: int) -> list[str]:
    """Generate ULIDs that sort in generation order.

    ULIDs minted in the same millisecond have random suffixes, so they are
    derived from one base value instead.
    """
    base = int(ULID())
    return [str(ULID.from_int(base + offset)) for offset in range(count)]


class DomainEventCapture:
    """Converts pending domain events into outbox entries.

    The clock is read once per call, so every event captured in one commit
    shares the same occurred_on_utc. Ids increase in input order, so the
    relay's (occurred_on_utc, id) ordering preserves the order in which the
    events were raised.
    """

    def __init__(
        self,
        serializer: EventSerializer,
        clock: Clock,
        probe: EventCaptureProbe | None = None,
    ) -> None:
        self._serializer = serializer
        self._clock = clock
        self._probe = probe or DefaultEventCaptureProbe()

    def build_entries(self, pending: Sequence[PendingDomainEvent]) -> list[OutboxEntry]:
        """Serialize pending events into outbox entries.

        Args:
            pending: Events drained from the change tracker, in raise order

        Returns:
            One pending OutboxEntry per event

        Raises:
            EventSerializationError: If any event cannot be serialized. No
                entries are returned, so the enclosing commit must fail.
        """
        if not pending:
            return []

        occurred_on_utc = self._clock.now()
        ids = _sequential_ids(len(pending))
        entries: list[OutboxEntry] = []

        for entry_id, (aggregate_type, aggregate_id, domain_event) in zip(
            ids, pending
        ):
            event_type = type(domain_event).__name__
            try:
                content = self._serializer.serialize(domain_event)
            except Exception as e:
                self._probe.event_serialization_failed(event_type, str(e))
                raise EventSerializationError(event_type, str(e)) from e

            entries.append(
                OutboxEntry(
                    id=entry_id,
                    aggregate_type=aggregate_type,
                    aggregate_id=aggregate_id,
                    event_type=event_type,
                    content=content,
                    occurred_on_utc=occurred_on_utc,
                )
            )

        self._probe.events_captured(len(entries), occurred_on_utc)
        return entries


class OutboxCommitInterceptor:
    """Stages pending domain events into the outbox on every commit.

    The interceptor listens to the session's ``before_commit`` event. Rows
    added there are flushed by the same commit, so the business change and
    its outbox rows persist together or not at all. An exception raised
    while capturing propagates out of ``commit()``.
    """

    def __init__(
        self,
        session: AsyncSession,
        source: PendingEventSource,
        capture: DomainEventCapture,
    ) -> None:
        self._session = session
        self._source = source
        self._capture = capture

    @property
    def installed(self) -> bool:
        return event.contains(
            self._session.sync_session, "before_commit", self._before_commit
        )

    def install(self) -> None:
        """Start intercepting commits of the session."""
        if not self.installed:
            event.listen(
                self._session.sync_session, "before_commit", self._before_commit
            )

    def uninstall(self) -> None:
        """Stop intercepting commits of the session."""
        if self.installed:
            event.remove(
                self._session.sync_session, "before_commit", self._before_commit
            )

    def _before_commit(self, session: Session) -> None:
        pending = self._source.drain_pending_events()
        entries = self._capture.build_entries(pending)
        if entries:
            session.add_all([OutboxModel.from_value_object(e) for e in entries])
