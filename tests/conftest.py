"""Shared fixtures: a fresh in-memory SQLite database per test."""
import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

import pytest_asyncio

from db.connection import init_db, make_engine, make_session_factory
from db.gateway import SubscriberGateway
from db.repository import SubscriberRepository
from viewmodel import SubscriberViewModel

MEMORY_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def session_factory():
    engine = make_engine(MEMORY_URL)
    await init_db(engine)
    yield make_session_factory(engine)
    await engine.dispose()


@pytest_asyncio.fixture
async def gateway(session_factory):
    gw = SubscriberGateway(session_factory)
    await gw.refresh()
    return gw


@pytest_asyncio.fixture
async def view_model(gateway):
    vm = SubscriberViewModel(SubscriberRepository(gateway))
    yield vm
    await vm.join()
