"""
whatsbot - WhatsApp Web client driven through a browser page.

Injects a store/helper layer into WhatsApp Web, turns its internal
change notifications into events and runs commands inside the page.
"""

__version__ = "0.1.0"

from whatsbot.core import Client, ClientOptions, load_config
from whatsbot.errors import (
    BootstrapError,
    ChatNotFoundError,
    ClientNotReadyError,
    ContactNotFoundError,
    NoChatAvailableError,
    WhatsBotError,
)
from whatsbot.models import (
    Chat,
    ClientInfo,
    Contact,
    Events,
    GroupChat,
    Location,
    Message,
    MessageAck,
    MessageMedia,
    Session,
    WAState,
)

__all__ = [
    "Client",
    "ClientOptions",
    "load_config",
    "BootstrapError",
    "ChatNotFoundError",
    "ClientNotReadyError",
    "ContactNotFoundError",
    "NoChatAvailableError",
    "WhatsBotError",
    "Chat",
    "ClientInfo",
    "Contact",
    "Events",
    "GroupChat",
    "Location",
    "Message",
    "MessageAck",
    "MessageMedia",
    "Session",
    "WAState",
]
