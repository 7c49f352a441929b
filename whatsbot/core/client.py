"""Main client: bootstrap, event wiring and the public command surface."""

import asyncio
import logging
from typing import Optional, Sequence, Union

from whatsbot.clients.page import PlaywrightContext, RemoteContext
from whatsbot.core.config import ClientOptions
from whatsbot.core.emitter import EventEmitter
from whatsbot.errors import BootstrapError, ClientNotReadyError
from whatsbot.models import (
    Chat,
    ClientInfo,
    Contact,
    Events,
    Message,
    MessageMedia,
    Session,
    WAState,
)
from whatsbot.services.bootstrap import SessionBootstrap
from whatsbot.services.commands import CommandBridge, Content
from whatsbot.services.events import EventBridge

logger = logging.getLogger(__name__)


class Client(EventEmitter):
    """
    Programmatic WhatsApp Web client driving a browser page.

    Usage:
        client = Client()
        client.on(Events.MESSAGE_RECEIVED, handle)
        await client.initialize()
        await client.send_message("123@c.us", "hi")
        await client.destroy()

    Events:
        authenticated(Session), ready(), message_create(Message),
        message_received(Message), message_revoked_everyone(Message,
        Optional[Message]), message_removed_by_me(Message),
        message_ack(Message, int), state_changed(WAState),
        disconnected(WAState)
    """

    def __init__(
        self,
        options: Optional[ClientOptions] = None,
        context: Optional[RemoteContext] = None,
    ):
        super().__init__()
        self.options = options or ClientOptions()
        self.context = context
        self.session: Optional[Session] = None
        self.info: Optional[ClientInfo] = None

        self._events: Optional[EventBridge] = None
        self._commands: Optional[CommandBridge] = None
        self._ready = False
        self._destroy_task: Optional[asyncio.Task] = None

    @property
    def is_ready(self) -> bool:
        return self._ready

    async def initialize(self) -> None:
        """
        Bootstrap the page and start publishing events.

        Launches a browser when no context was given. Any failure after
        store injection aborts with BootstrapError; the client stays
        unusable and retrying is up to the caller. Calling it again on a
        ready client does nothing.
        """
        if self._ready:
            logger.warning("Client already initialized")
            return

        try:
            if self.context is None:
                self.context = await PlaywrightContext.launch(self.options)

            bootstrap = SessionBootstrap(self.context, self, self.options)
            self.session, self.info = await bootstrap.run()

            self._events = EventBridge(self.context, self, on_disconnect=self.destroy)
            await self._events.attach()
        except Exception as e:
            logger.error(f"Initialization failed: {e}")
            raise BootstrapError(f"Initialization failed: {e}") from e

        self._commands = CommandBridge(self.context)
        self._ready = True
        logger.info("🚀 Client ready")
        self.emit(Events.READY)

    async def destroy(self) -> None:
        """
        Tear the client down and close the browser.

        Optionally waits first for the "keep your phone connected" marker
        (``destroy_waits_for_keep_session_marker``); that wait has no
        timeout. Concurrent and repeated calls share one teardown.
        """
        if self._destroy_task is None:
            self._destroy_task = asyncio.ensure_future(self._teardown())
        await self._destroy_task

    async def _teardown(self) -> None:
        self._ready = False
        if self._events is not None:
            self._events.detach()

        if self.context is None:
            return

        if self.options.destroy_waits_for_keep_session_marker:
            logger.info("⏳ Waiting for keep-session marker before closing...")
            await self.context.wait_for_selector(self.options.keep_session_marker_selector)

        await self.context.close()
        logger.info("👋 Client destroyed")

    def _bridge(self) -> CommandBridge:
        if not self._ready or self._commands is None:
            raise ClientNotReadyError("Client is not ready; call initialize() first")
        return self._commands

    async def send_message(
        self,
        chat_id: str,
        content: Content,
        *,
        caption: Optional[str] = None,
        quoted_message_id: Optional[str] = None,
        mentions: Optional[Sequence[Union[Contact, str]]] = None,
        media: Optional[MessageMedia] = None,
        send_seen: bool = True,
    ) -> Message:
        """Send a message; see CommandBridge.send_message."""
        return await self._bridge().send_message(
            chat_id,
            content,
            caption=caption,
            quoted_message_id=quoted_message_id,
            mentions=mentions,
            media=media,
            send_seen=send_seen,
        )

    async def send_seen(self, chat_id: str) -> bool:
        """Mark a chat as seen. Returns False if the chat is unknown."""
        return await self._bridge().send_seen(chat_id)

    async def get_chats(self) -> list[Chat]:
        return await self._bridge().get_chats()

    async def get_chat_by_id(self, chat_id: str) -> Chat:
        return await self._bridge().get_chat_by_id(chat_id)

    async def get_contacts(self) -> list[Contact]:
        return await self._bridge().get_contacts()

    async def get_contact_by_id(self, contact_id: str) -> Contact:
        return await self._bridge().get_contact_by_id(contact_id)

    async def accept_invite(self, invite_code: str) -> str:
        return await self._bridge().accept_invite(invite_code)

    async def set_status(self, status: str) -> None:
        await self._bridge().set_status(status)

    async def get_state(self) -> Union[WAState, str, None]:
        return await self._bridge().get_state()

    async def archive_chat(self, chat_id: str) -> bool:
        """Archive a chat; returns the resulting archive flag."""
        return await self._bridge().archive_chat(chat_id)

    async def unarchive_chat(self, chat_id: str) -> bool:
        """Unarchive a chat; returns the resulting archive flag."""
        return await self._bridge().unarchive_chat(chat_id)

    async def reset_state(self) -> None:
        await self._bridge().reset_state()
