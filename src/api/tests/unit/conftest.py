"""Unit test fixtures.

Store-level tests run against a SQLite file database created per test, so
the relay and the business writes can use separate sessions exactly as they
do in production.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from datetime import UTC, datetime
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

import iam.infrastructure.models  # noqa: F401  registers IAM tables
from iam.infrastructure.outbox import IAMEventSerializer
from infrastructure.database.models import Base
from infrastructure.outbox import CompositeSerializer, DomainEventCapture
from infrastructure.outbox.models import OutboxModel  # noqa: F401
from shared_kernel.clock import FrozenClock

FROZEN_NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def mock_db_settings():
    """Provide test database settings."""
    from infrastructure.settings import DatabaseSettings

    return DatabaseSettings(
        host="testhost",
        port=5432,
        database="testdb",
        username="testuser",
        password="testpass",
    )


@pytest_asyncio.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Provide an engine on a fresh SQLite database with all tables."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'outbox.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Provide a session factory configured like the production one."""
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


@pytest.fixture
def clock() -> FrozenClock:
    """Provide a clock frozen at FROZEN_NOW."""
    return FrozenClock(FROZEN_NOW)


@pytest.fixture
def serializer() -> CompositeSerializer:
    """Provide the registry with the IAM serializer registered."""
    composite = CompositeSerializer()
    composite.register(IAMEventSerializer(), context_name="iam")
    return composite


@pytest.fixture
def capture_probe() -> MagicMock:
    """Provide a mock capture probe."""
    return MagicMock()


@pytest.fixture
def capture(
    serializer: CompositeSerializer, clock: FrozenClock, capture_probe: MagicMock
) -> DomainEventCapture:
    """Provide a capture that stamps entries with the frozen clock."""
    return DomainEventCapture(serializer=serializer, clock=clock, probe=capture_probe)
