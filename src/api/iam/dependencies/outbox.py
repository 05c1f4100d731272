"""Outbox wiring for the IAM bounded context.

Provides the decoder registry, the event bus with the IAM handlers, the
commit-time capture and the relay built from settings.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Annotated, AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from iam.application.event_handlers import register_iam_event_handlers
from iam.infrastructure.outbox import IAMEventSerializer
from infrastructure.database.dependencies import get_write_session
from infrastructure.database.unit_of_work import SqlAlchemyUnitOfWork
from infrastructure.events import InProcessEventBus
from infrastructure.outbox import (
    CompositeSerializer,
    DomainEventCapture,
    OutboxProcessor,
    OutboxRelay,
)
from shared_kernel.clock import Clock, SystemClock
from shared_kernel.outbox.observability import DefaultOutboxRelayProbe

if TYPE_CHECKING:
    from infrastructure.settings import OutboxSettings


@lru_cache
def get_clock() -> Clock:
    """Get the process-wide clock."""
    return SystemClock()


@lru_cache
def get_event_serializer() -> CompositeSerializer:
    """Get the serializer registry shared by capture and relay.

    Every bounded context registers its serializer here. An event type
    claimed by two serializers fails at startup.
    """
    serializer = CompositeSerializer(probe=DefaultOutboxRelayProbe())
    serializer.register(IAMEventSerializer(), context_name="iam")
    return serializer


@lru_cache
def get_event_bus() -> InProcessEventBus:
    """Get the event bus with all in-process subscribers registered."""
    bus = InProcessEventBus()
    register_iam_event_handlers(bus)
    return bus


def get_event_capture() -> DomainEventCapture:
    """Get the commit-time converter of domain events to outbox entries."""
    return DomainEventCapture(serializer=get_event_serializer(), clock=get_clock())


async def get_unit_of_work(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    capture: Annotated[DomainEventCapture, Depends(get_event_capture)],
) -> AsyncGenerator[SqlAlchemyUnitOfWork, None]:
    """Provide a unit of work for one request.

    The route commits explicitly; anything left uncommitted is discarded
    when the session closes.

    Yields:
        Unit of work bound to the request's write session
    """
    uow = SqlAlchemyUnitOfWork(session, capture)
    try:
        yield uow
    finally:
        uow.close()


def build_outbox_relay(
    settings: OutboxSettings,
    session_factory: async_sessionmaker[AsyncSession],
) -> OutboxRelay:
    """Assemble the relay and its batch processor from settings.

    Args:
        settings: Relay interval and batch size
        session_factory: Factory for the processor's own sessions

    Returns:
        A relay that has not been started
    """
    probe = DefaultOutboxRelayProbe()
    processor = OutboxProcessor(
        session_factory=session_factory,
        serializer=get_event_serializer(),
        publisher=get_event_bus(),
        clock=get_clock(),
        probe=probe,
        batch_size=settings.batch_size,
    )
    return OutboxRelay(
        processor=processor,
        probe=probe,
        interval_seconds=settings.interval_seconds,
    )
