"""Storage gateway: subscriber mutations plus a live, push-updated list.

Each mutation runs in its own session (commit on success, rollback on
error). After a successful commit the gateway re-reads the table and pushes
the fresh list to `subscribers` observers, so consumers never re-query.
"""
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from db.connection import AsyncSessionLocal, session_scope
from db.repositories import subscribers as subscribers_repo
from live_data import LiveData, MutableLiveData
from schemas.subscriber import Subscriber

logger = logging.getLogger(__name__)


class SubscriberGateway:
    def __init__(self, session_factory: Optional[async_sessionmaker[AsyncSession]] = None):
        self._session_factory = session_factory or AsyncSessionLocal
        self._subscribers: MutableLiveData[list[Subscriber]] = MutableLiveData([])

    @property
    def subscribers(self) -> LiveData[list[Subscriber]]:
        return self._subscribers

    async def refresh(self) -> list[Subscriber]:
        """Re-read every subscriber and publish the list."""
        async with session_scope(self._session_factory) as session:
            rows = await subscribers_repo.get_all(session)
        self._subscribers.value = rows
        return rows

    async def insert(self, subscriber: Subscriber) -> int:
        """Return the new row id. Raises StorageError on a constraint violation."""
        async with session_scope(self._session_factory) as session:
            row_id = await subscribers_repo.insert(session, subscriber)
        await self.refresh()
        return row_id

    async def update(self, subscriber: Subscriber) -> int:
        async with session_scope(self._session_factory) as session:
            count = await subscribers_repo.update(session, subscriber)
        if count:
            await self.refresh()
        return count

    async def delete(self, subscriber: Subscriber) -> int:
        async with session_scope(self._session_factory) as session:
            count = await subscribers_repo.delete(session, subscriber)
        if count:
            await self.refresh()
        return count

    async def delete_all(self) -> int:
        async with session_scope(self._session_factory) as session:
            count = await subscribers_repo.delete_all(session)
        if count:
            await self.refresh()
        return count
