"""Subscriber repository — row-level insert, update, delete and list."""
import logging

from sqlalchemy import delete as sa_delete
from sqlalchemy import select
from sqlalchemy import update as sa_update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from db.exceptions import StorageError
from db.models import SubscriberRow
from schemas.subscriber import Subscriber

logger = logging.getLogger(__name__)


async def insert(session: AsyncSession, subscriber: Subscriber) -> int:
    """Insert a subscriber and return its row id.

    id=0 lets the database assign the id; any other id is written as-is and
    raises StorageError if it is already taken.
    """
    row = SubscriberRow(name=subscriber.name, email=subscriber.email)
    if subscriber.id:
        row.id = subscriber.id
    session.add(row)
    try:
        await session.flush()
    except IntegrityError as exc:
        raise StorageError(f"Could not insert subscriber {subscriber.email!r}: {exc.orig}") from exc
    logger.debug("Inserted subscriber id=%s", row.id)
    return row.id


async def update(session: AsyncSession, subscriber: Subscriber) -> int:
    """Overwrite name and email of the row matching subscriber.id. Returns rows updated."""
    result = await session.execute(
        sa_update(SubscriberRow)
        .where(SubscriberRow.id == subscriber.id)
        .values(name=subscriber.name, email=subscriber.email)
    )
    return result.rowcount


async def delete(session: AsyncSession, subscriber: Subscriber) -> int:
    """Delete the row matching subscriber.id. Returns rows deleted."""
    result = await session.execute(
        sa_delete(SubscriberRow).where(SubscriberRow.id == subscriber.id)
    )
    return result.rowcount


async def delete_all(session: AsyncSession) -> int:
    """Delete every subscriber. Returns rows deleted."""
    result = await session.execute(sa_delete(SubscriberRow))
    return result.rowcount


async def get_all(session: AsyncSession) -> list[Subscriber]:
    """Return all subscribers ordered by id."""
    result = await session.execute(select(SubscriberRow).order_by(SubscriberRow.id))
    return [Subscriber.model_validate(row) for row in result.scalars().all()]
