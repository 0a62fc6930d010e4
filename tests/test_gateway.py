"""Tests for the storage gateway's live list and the repository pass-through."""
import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from db.exceptions import StorageError
from db.repository import SubscriberRepository
from schemas.subscriber import Subscriber


@pytest.mark.asyncio
async def test_live_list_follows_mutations(gateway):
    seen = []
    gateway.subscribers.observe(seen.append)
    assert seen == [[]]

    row_id = await gateway.insert(Subscriber(name="Ann", email="ann@example.com"))
    assert gateway.subscribers.value == [Subscriber(id=row_id, name="Ann", email="ann@example.com")]

    await gateway.update(Subscriber(id=row_id, name="Anne", email="ann@example.com"))
    assert gateway.subscribers.value[0].name == "Anne"

    await gateway.delete_all()
    assert gateway.subscribers.value == []
    assert len(seen) == 4


@pytest.mark.asyncio
async def test_no_push_when_nothing_changed(gateway):
    seen = []
    gateway.subscribers.observe(seen.append)

    ghost = Subscriber(id=42, name="Ghost", email="ghost@example.com")
    assert await gateway.update(ghost) == 0
    assert await gateway.delete(ghost) == 0
    assert await gateway.delete_all() == 0
    assert len(seen) == 1


@pytest.mark.asyncio
async def test_failed_insert_raises_and_keeps_list(gateway):
    await gateway.insert(Subscriber(id=3, name="Ann", email="ann@example.com"))
    before = gateway.subscribers.value

    with pytest.raises(StorageError):
        await gateway.insert(Subscriber(id=3, name="Bob", email="bob@example.com"))

    assert gateway.subscribers.value is before


@pytest.mark.asyncio
async def test_refresh_loads_existing_rows(session_factory):
    from db.gateway import SubscriberGateway

    writer = SubscriberGateway(session_factory)
    await writer.insert(Subscriber(name="Ann", email="ann@example.com"))

    reader = SubscriberGateway(session_factory)
    assert reader.subscribers.value == []
    rows = await reader.refresh()
    assert [r.email for r in rows] == ["ann@example.com"]
    assert reader.subscribers.value == rows


class TestSubscriberRepository:
    @pytest.mark.asyncio
    async def test_delegates_every_call(self):
        gateway = MagicMock()
        gateway.insert = AsyncMock(return_value=11)
        gateway.update = AsyncMock(return_value=1)
        gateway.delete = AsyncMock(return_value=1)
        gateway.delete_all = AsyncMock(return_value=5)
        repo = SubscriberRepository(gateway)
        sub = Subscriber(id=11, name="Ann", email="ann@example.com")

        assert repo.subscribers is gateway.subscribers
        assert await repo.insert(sub) == 11
        assert await repo.update(sub) == 1
        assert await repo.delete(sub) == 1
        assert await repo.delete_all() == 5

        gateway.insert.assert_awaited_once_with(sub)
        gateway.update.assert_awaited_once_with(sub)
        gateway.delete.assert_awaited_once_with(sub)
        gateway.delete_all.assert_awaited_once_with()

    @pytest.mark.asyncio
    async def test_storage_error_passes_through(self):
        gateway = MagicMock()
        gateway.insert = AsyncMock(side_effect=StorageError("duplicate"))

        with pytest.raises(StorageError):
            await SubscriberRepository(gateway).insert(Subscriber(name="Ann", email="a@example.com"))


@pytest.mark.asyncio
async def test_constraint_violation_is_not_logged_as_error(gateway, caplog):
    await gateway.insert(Subscriber(id=9, name="Ann", email="ann@example.com"))

    with caplog.at_level(logging.DEBUG, logger="db"):
        with pytest.raises(StorageError):
            await gateway.insert(Subscriber(id=9, name="Bob", email="bob@example.com"))

    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]
    assert any("rolled back" in r.getMessage() for r in caplog.records)
