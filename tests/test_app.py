"""Tests for the composition root."""
import logging

import pytest

import app
from schemas.subscriber import Subscriber
from viewmodel import Event, Mode


@pytest.mark.asyncio
async def test_build_view_model_preloads_existing_rows(gateway, session_factory):
    await gateway.insert(Subscriber(name="Ann", email="ann@example.com"))

    vm = await app.build_view_model(session_factory)

    assert vm.mode is Mode.CREATING
    assert [s.name for s in vm.subscribers.value] == ["Ann"]


def test_log_message_consumes_event(caplog):
    event = Event("1 Subscriber Deleted Successfully")
    with caplog.at_level(logging.INFO, logger="app"):
        app._log_message(event)
        app._log_message(event)

    assert caplog.text.count("1 Subscriber Deleted Successfully") == 1
    assert event.has_been_handled


def test_unknown_command_exits():
    with pytest.raises(SystemExit):
        app.main([])
