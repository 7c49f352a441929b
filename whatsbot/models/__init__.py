"""Data models package."""

from whatsbot.models.chat import Chat, Contact, GroupChat, create_chat
from whatsbot.models.events import Events
from whatsbot.models.message import Location, Message, MessageAck, MessageId, MessageMedia
from whatsbot.models.session import ACCEPTED_STATES, ClientInfo, Session, WAState, is_accepted_state

__all__ = [
    "Chat",
    "Contact",
    "GroupChat",
    "create_chat",
    "Events",
    "Location",
    "Message",
    "MessageAck",
    "MessageId",
    "MessageMedia",
    "ACCEPTED_STATES",
    "ClientInfo",
    "Session",
    "WAState",
    "is_accepted_state",
]
