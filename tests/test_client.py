"""
Tests for the client facade (whatsbot/core/client.py)
"""
import asyncio

import pytest

from whatsbot import Client, ClientOptions
from whatsbot.errors import BootstrapError, ClientNotReadyError
from whatsbot.injected import LISTENERS, LOAD_UTILS, load_script
from whatsbot.models import Events
from whatsbot.services import commands

from tests.conftest import Recorder
from tests.test_bootstrap import ready_context


class TestInitialize:
    """initialize() lifecycle"""

    def test_emits_authenticated_then_ready(self):
        context = ready_context()
        client = Client(context=context)
        recorder = Recorder(client, Events.AUTHENTICATED, Events.READY)

        asyncio.run(client.initialize())

        assert recorder.names() == ["authenticated", "ready"]
        assert client.is_ready
        assert client.session.token2 == '"token-2"'
        assert client.info.pushname == "Bot"
        assert context.scripts()[-1] == load_script(LISTENERS)
        assert "onAddMessageEvent" in context.exposed

    def test_second_initialize_is_a_no_op(self):
        context = ready_context()
        client = Client(context=context)
        recorder = Recorder(client, Events.READY)

        async def scenario():
            await client.initialize()
            calls = len(context.calls)
            await client.initialize()
            return calls

        calls = asyncio.run(scenario())

        assert len(context.calls) == calls
        assert recorder.names() == ["ready"]
        assert client.is_ready

    def test_bootstrap_failure_leaves_client_unusable(self):
        context = ready_context(**{load_script(LOAD_UTILS): RuntimeError("boom")})
        client = Client(context=context)
        recorder = Recorder(client, Events.READY)

        with pytest.raises(BootstrapError) as exc:
            asyncio.run(client.initialize())

        assert isinstance(exc.value.__cause__, RuntimeError)
        assert not client.is_ready
        assert recorder.events == []
        with pytest.raises(ClientNotReadyError):
            asyncio.run(client.get_chats())

    def test_commands_before_initialize_fail(self):
        client = Client(context=ready_context())
        with pytest.raises(ClientNotReadyError):
            asyncio.run(client.send_message("1@c.us", "hi"))

    def test_commands_after_ready(self):
        context = ready_context(**{commands.GET_STATE: "CONNECTED"})
        client = Client(context=context)

        async def scenario():
            await client.initialize()
            return await client.get_state()

        assert asyncio.run(scenario()) == "CONNECTED"


class TestDestroy:
    """destroy() and disconnect-triggered teardown"""

    def test_closes_context_once(self):
        context = ready_context()
        client = Client(context=context)

        async def scenario():
            await client.initialize()
            await client.destroy()
            context.closed = False
            await client.destroy()

        asyncio.run(scenario())
        assert context.closed is False
        assert not client.is_ready

    def test_marker_wait_is_opt_in(self):
        context = ready_context()
        client = Client(context=context)

        async def scenario():
            await client.initialize()
            await client.destroy()

        asyncio.run(scenario())
        assert context.waited_selectors == []
        assert context.closed

    def test_waits_for_marker_when_configured(self):
        context = ready_context()
        client = Client(ClientOptions(destroy_waits_for_keep_session_marker=True), context=context)

        async def scenario():
            await client.initialize()
            await client.destroy()

        asyncio.run(scenario())
        assert context.waited_selectors == ['[data-asset-intro-image="true"]']
        assert context.calls[-1] == ("wait_for_selector", '[data-asset-intro-image="true"]')
        assert context.closed

    def test_disconnect_destroys_client(self, raw_message):
        context = ready_context()
        client = Client(context=context)
        recorder = Recorder(client, Events.STATE_CHANGED, Events.DISCONNECTED, Events.MESSAGE_CREATE)

        async def scenario():
            await client.initialize()
            context.fire("onAppStateChangedEvent", "CONFLICT")
            await client._events.wait_teardown()
            context.fire("onAddMessageEvent", raw_message())

        asyncio.run(scenario())
        assert recorder.names() == ["state_changed", "disconnected"]
        assert context.closed
        assert not client.is_ready
