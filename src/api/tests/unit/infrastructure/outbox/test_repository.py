"""Unit tests for OutboxRepository.

These tests run against a SQLite database so ordering, the pending filter
and the guarded updates are exercised with real SQL.
"""

from datetime import UTC, datetime, timedelta

import pytest

from infrastructure.outbox.repository import OutboxRepository
from shared_kernel.outbox.value_objects import OutboxEntry

T0 = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def _entry(entry_id: str, occurred_on_utc: datetime = T0, **overrides) -> OutboxEntry:
    values = dict(
        id=entry_id,
        aggregate_type="role",
        aggregate_id="01HZX3B6Q4S0000000000000BB",
        event_type="RoleDeleted",
        content={"role_id": "01HZX3B6Q4S0000000000000BB"},
        occurred_on_utc=occurred_on_utc,
    )
    values.update(overrides)
    return OutboxEntry(**values)


async def _seed(session_factory, entries: list[OutboxEntry]) -> None:
    async with session_factory() as session:
        await OutboxRepository(session).append(entries)
        await session.commit()


class TestOutboxRepositoryAppend:
    """Tests for OutboxRepository.append()."""

    @pytest.mark.asyncio
    async def test_append_is_part_of_callers_transaction(self, session_factory):
        """Entries appended and rolled back are never visible."""
        async with session_factory() as session:
            await OutboxRepository(session).append([_entry("01A")])
            await session.rollback()

        async with session_factory() as session:
            assert await OutboxRepository(session).count_pending() == 0

    @pytest.mark.asyncio
    async def test_appended_entries_are_pending(self, session_factory):
        """Committed entries are fetched with every field intact."""
        entry = _entry("01A", content={"role_id": "01B", "nested": {"k": [1, 2]}})
        await _seed(session_factory, [entry])

        async with session_factory() as session:
            fetched = await OutboxRepository(session).fetch_pending(10)

        assert fetched == [entry]
        assert fetched[0].occurred_on_utc.tzinfo is not None


class TestOutboxRepositoryFetchPending:
    """Tests for OutboxRepository.fetch_pending()."""

    @pytest.mark.asyncio
    async def test_orders_by_occurrence_then_id(self, session_factory):
        """Older entries come first; ties are broken by id."""
        await _seed(
            session_factory,
            [
                _entry("01C", T0),
                _entry("01A", T0 + timedelta(seconds=1)),
                _entry("01B", T0),
            ],
        )

        async with session_factory() as session:
            fetched = await OutboxRepository(session).fetch_pending(10)

        assert [e.id for e in fetched] == ["01B", "01C", "01A"]

    @pytest.mark.asyncio
    async def test_respects_limit(self, session_factory):
        """At most limit entries are returned, oldest first."""
        await _seed(
            session_factory,
            [_entry(f"01{i}", T0 + timedelta(seconds=i)) for i in range(5)],
        )

        async with session_factory() as session:
            fetched = await OutboxRepository(session).fetch_pending(2)

        assert [e.id for e in fetched] == ["010", "011"]

    @pytest.mark.asyncio
    async def test_skips_processed_entries(self, session_factory):
        """Processed entries never come back."""
        await _seed(session_factory, [_entry("01A"), _entry("01B")])
        async with session_factory() as session:
            await OutboxRepository(session).mark_processed("01A", T0)
            await session.commit()

        async with session_factory() as session:
            fetched = await OutboxRepository(session).fetch_pending(10)

        assert [e.id for e in fetched] == ["01B"]

    @pytest.mark.asyncio
    async def test_includes_failed_entries(self, session_factory):
        """Entries with a recorded error are still pending."""
        await _seed(session_factory, [_entry("01A")])
        async with session_factory() as session:
            await OutboxRepository(session).mark_failed("01A", "RuntimeError: x")
            await session.commit()

        async with session_factory() as session:
            fetched = await OutboxRepository(session).fetch_pending(10)

        assert [(e.id, e.error) for e in fetched] == [("01A", "RuntimeError: x")]

    @pytest.mark.asyncio
    async def test_empty_store_returns_empty_list(self, session_factory):
        """No pending entries is not an error."""
        async with session_factory() as session:
            assert await OutboxRepository(session).fetch_pending(10) == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit", [0, -1])
    async def test_rejects_non_positive_limit(self, session_factory, limit):
        """A batch must allow at least one entry."""
        async with session_factory() as session:
            with pytest.raises(ValueError, match="limit must be positive"):
                await OutboxRepository(session).fetch_pending(limit)


class TestOutboxRepositoryOutcomes:
    """Tests for mark_processed() and mark_failed()."""

    @pytest.mark.asyncio
    async def test_mark_processed_sets_timestamp_and_clears_error(
        self, session_factory
    ):
        """A successful retry clears the previous failure."""
        await _seed(session_factory, [_entry("01A", error="RuntimeError: x")])
        processed_at = T0 + timedelta(minutes=5)

        async with session_factory() as session:
            repo = OutboxRepository(session)
            assert await repo.mark_processed("01A", processed_at) is True
            await session.commit()

        async with session_factory() as session:
            assert await OutboxRepository(session).count_pending() == 0

    @pytest.mark.asyncio
    async def test_processed_timestamp_is_never_overwritten(self, session_factory):
        """A second mark_processed is a no-op."""
        await _seed(session_factory, [_entry("01A")])

        async with session_factory() as session:
            repo = OutboxRepository(session)
            assert await repo.mark_processed("01A", T0) is True
            assert await repo.mark_processed("01A", T0 + timedelta(hours=1)) is False
            assert await repo.mark_failed("01A", "late failure") is False
            await session.commit()

    @pytest.mark.asyncio
    async def test_mark_failed_records_latest_error(self, session_factory):
        """Only the most recent failure detail is kept."""
        await _seed(session_factory, [_entry("01A")])

        async with session_factory() as session:
            repo = OutboxRepository(session)
            await repo.mark_failed("01A", "first")
            await repo.mark_failed("01A", "second")
            await session.commit()

        async with session_factory() as session:
            (entry,) = await OutboxRepository(session).fetch_pending(10)

        assert entry.error == "second"
        assert entry.is_pending

    @pytest.mark.asyncio
    async def test_outcome_touches_only_its_own_row(self, session_factory):
        """Marking one entry leaves its neighbours untouched."""
        await _seed(session_factory, [_entry("01A"), _entry("01B")])

        async with session_factory() as session:
            await OutboxRepository(session).mark_failed("01A", "boom")
            await session.commit()

        async with session_factory() as session:
            entries = {e.id: e for e in await OutboxRepository(session).fetch_pending(10)}

        assert entries["01A"].error == "boom"
        assert entries["01B"].error is None

    @pytest.mark.asyncio
    async def test_unknown_id_reports_no_update(self, session_factory):
        """Outcomes for missing entries return False."""
        async with session_factory() as session:
            repo = OutboxRepository(session)
            assert await repo.mark_processed("missing", T0) is False
            assert await repo.mark_failed("missing", "boom") is False
