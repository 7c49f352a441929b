"""Command bridge: host calls → expressions evaluated in the page."""

import logging
from typing import TYPE_CHECKING, Optional, Sequence, Union

from whatsbot.errors import ChatNotFoundError, ContactNotFoundError, NoChatAvailableError
from whatsbot.injected import SEND_MESSAGE, load_script
from whatsbot.models import (
    Chat,
    Contact,
    Location,
    Message,
    MessageMedia,
    WAState,
    create_chat,
)

if TYPE_CHECKING:
    from whatsbot.clients.page import InwardAPI

logger = logging.getLogger(__name__)

SEND_SEEN = "(chatId) => window.WWebJS.sendSeen(chatId)"
GET_CHATS = "() => window.WWebJS.getChats()"
GET_CHAT = "(chatId) => window.WWebJS.getChat(chatId)"
GET_CONTACTS = "() => window.WWebJS.getContacts()"
GET_CONTACT = "(contactId) => window.WWebJS.getContact(contactId)"
ACCEPT_INVITE = """async (inviteCode) => {
    const chatId = await window.Store.Invite.sendJoinGroupViaInvite(inviteCode);
    return chatId._serialized;
}"""
SET_STATUS = """async (status) => {
    await window.Store.Wap.sendSetStatus(status);
}"""
GET_STATE = "() => window.Store.AppState.state"
SET_ARCHIVE = """async ({ chatId, archive }) => {
    const chat = window.Store.Chat.get(chatId);
    await window.Store.Cmd.archiveChat(chat, archive);
    return chat.archive;
}"""
RESET_STATE = """() => {
    window.Store.AppState.phoneWatchdog.shiftTimer.forceRunNow();
}"""

Content = Union[str, MessageMedia, Location]


class CommandBridge:
    """
    Host-side command surface.

    Every operation is one evaluation against the page using only the
    ``window.WWebJS`` helpers and the raw ``window.Store``. Evaluation
    errors propagate unchanged; nothing here retries.
    """

    def __init__(self, context: "InwardAPI"):
        self.context = context

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
        """
        Send a message to a chat.

        Args:
            chat_id: Serialized chat id (e.g. ``123@c.us``)
            content: Text, a media attachment or a location
            caption: Caption for media sent as ``content``
            quoted_message_id: Serialized id of the message to reply to
            mentions: Contacts (or their ids) mentioned in the text
            media: Attachment to send with ``content`` as its caption
            send_seen: Mark the chat as seen before sending

        Raises:
            NoChatAvailableError: The chat is not in the chat list and the
                chat list is empty, so there is nothing to send through.
            ChatNotFoundError: The chat is not in the chat list and its id
                does not resolve to a WhatsApp user.
        """
        body, options = build_send_options(
            content,
            caption=caption,
            quoted_message_id=quoted_message_id,
            mentions=mentions,
            media=media,
        )

        result = await self.context.evaluate(
            load_script(SEND_MESSAGE),
            {"chatId": chat_id, "content": body, "options": options, "sendSeen": send_seen},
        )

        status = (result or {}).get("status")
        if status == "no_chat":
            raise NoChatAvailableError(chat_id)
        if status == "unresolved":
            raise ChatNotFoundError(chat_id)

        message = Message.from_raw(result["message"])
        logger.debug(f"📤 Sent {message.id.serialized} to {chat_id} ({result.get('path')})")
        return message

    async def send_seen(self, chat_id: str) -> bool:
        return bool(await self.context.evaluate(SEND_SEEN, chat_id))

    async def get_chats(self) -> list[Chat]:
        chats = await self.context.evaluate(GET_CHATS) or []
        return [create_chat(chat) for chat in chats]

    async def get_chat_by_id(self, chat_id: str) -> Chat:
        chat = await self.context.evaluate(GET_CHAT, chat_id)
        if chat is None:
            raise ChatNotFoundError(chat_id)
        return create_chat(chat)

    async def get_contacts(self) -> list[Contact]:
        contacts = await self.context.evaluate(GET_CONTACTS) or []
        return [Contact.from_raw(contact) for contact in contacts]

    async def get_contact_by_id(self, contact_id: str) -> Contact:
        contact = await self.context.evaluate(GET_CONTACT, contact_id)
        if contact is None:
            raise ContactNotFoundError(contact_id)
        return Contact.from_raw(contact)

    async def accept_invite(self, invite_code: str) -> str:
        """Join a group by invite code; returns the group's chat id."""
        return await self.context.evaluate(ACCEPT_INVITE, invite_code)

    async def set_status(self, status: str) -> None:
        await self.context.evaluate(SET_STATUS, status)

    async def get_state(self) -> Union[WAState, str, None]:
        state = await self.context.evaluate(GET_STATE)
        if state is None:
            return None
        try:
            return WAState(state)
        except ValueError:
            return state

    async def archive_chat(self, chat_id: str) -> bool:
        return await self._set_archive(chat_id, True)

    async def unarchive_chat(self, chat_id: str) -> bool:
        return await self._set_archive(chat_id, False)

    async def _set_archive(self, chat_id: str, archive: bool) -> bool:
        result = await self.context.evaluate(SET_ARCHIVE, {"chatId": chat_id, "archive": archive})
        return bool(result)

    async def reset_state(self) -> None:
        """Force the phone watchdog timer to fire now."""
        await self.context.evaluate(RESET_STATE)


def build_send_options(
    content: Content,
    *,
    caption: Optional[str] = None,
    quoted_message_id: Optional[str] = None,
    mentions: Optional[Sequence[Union[Contact, str]]] = None,
    media: Optional[MessageMedia] = None,
) -> tuple[str, dict]:
    """Normalize send arguments into the text body and in-page options."""
    options: dict = {
        "caption": caption,
        "quotedMessageId": quoted_message_id,
        "mentionedJidList": [m.id if isinstance(m, Contact) else m for m in mentions or []],
    }

    if isinstance(content, MessageMedia):
        options["attachment"] = content.model_dump()
        body = ""
    elif isinstance(media, MessageMedia):
        if not isinstance(content, str):
            raise TypeError("content must be text when media is given")
        options["attachment"] = media.model_dump()
        options["caption"] = content
        body = ""
    elif isinstance(content, Location):
        options["location"] = content.model_dump()
        body = ""
    elif isinstance(content, str):
        body = content
    else:
        raise TypeError(f"Unsupported message content: {type(content).__name__}")

    return body, options
