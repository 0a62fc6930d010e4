"""Database connection module for the subscriber manager.

Provides:
- make_engine(url): AsyncEngine for an async SQLite URL
- engine: AsyncEngine built from DATABASE_URL
- AsyncSessionLocal: Session factory bound to engine
- session_scope(factory): commit-or-rollback async context manager
- init_db(): create tables from ORM metadata
"""
import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from dotenv import load_dotenv
from sqlalchemy.engine import URL
from sqlalchemy.engine import make_url as _make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from db.exceptions import StorageError
from db.models import Base

logger = logging.getLogger(__name__)

load_dotenv()

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./subscribers.db"
SUPPORTED_DRIVERS = ("sqlite+aiosqlite",)


def _parse_url(raw: str) -> URL:
    url = _make_url(raw)
    if url.drivername not in SUPPORTED_DRIVERS:
        raise RuntimeError(
            f"DATABASE_URL must use an async driver ({', '.join(SUPPORTED_DRIVERS)}). "
            f"Got: '{url.drivername}'. "
            f"Example: {DEFAULT_DATABASE_URL}"
        )
    return url


def _is_memory(url: URL) -> bool:
    return url.database in (None, "", ":memory:")


def make_engine(raw_url: str, echo: bool = False) -> AsyncEngine:
    """Create an AsyncEngine for an async SQLite URL.

    In-memory databases share a single connection (StaticPool) so every
    session sees the same tables; file databases use the pool settings
    from the environment.
    """
    url = _parse_url(raw_url)
    if _is_memory(url):
        return create_async_engine(
            url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(
        url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=int(os.environ.get("DB_POOL_SIZE", "5")),
        max_overflow=int(os.environ.get("DB_MAX_OVERFLOW", "10")),
        pool_timeout=int(os.environ.get("DB_POOL_TIMEOUT", "30")),
    )


def make_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


DATABASE_URL = os.environ.get("DATABASE_URL", DEFAULT_DATABASE_URL)
DB_ECHO = os.environ.get("DB_ECHO", "").lower() in ("1", "true", "yes")

engine = make_engine(DATABASE_URL, echo=DB_ECHO)

AsyncSessionLocal = make_session_factory(engine)


@asynccontextmanager
async def session_scope(
    factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Yield a session from factory; commit on success, roll back on error."""
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except StorageError as exc:
            await session.rollback()
            logger.debug("Database session rolled back: %s", exc)
            raise
        except Exception:
            await session.rollback()
            logger.exception("Database session rolled back due to exception")
            raise


async def init_db(bind: Optional[AsyncEngine] = None) -> None:
    """Create the subscriber table if it does not exist."""
    bind = bind or engine
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.debug("Schema ready on %s", bind.url)


async def dispose_engine() -> None:
    """Dispose the engine connection pool. Call once on application shutdown."""
    await engine.dispose()
