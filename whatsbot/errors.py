"""Exception types raised by whatsbot."""


class WhatsBotError(Exception):
    """Base class for all whatsbot errors."""


class BootstrapError(WhatsBotError):
    """Initialization failed before the client became ready."""


class ClientNotReadyError(WhatsBotError):
    """A command was issued before `ready` or after `destroy()`."""


class NoChatAvailableError(WhatsBotError):
    """
    No chat exists to borrow an identity from.

    Sending to a chat that is not in the local chat list works by
    temporarily re-pointing an existing chat at the destination. With an
    empty chat list there is nothing to re-point.
    """

    def __init__(self, chat_id: str):
        super().__init__(
            f"Cannot send to {chat_id}: chat list is empty, "
            "open at least one conversation first"
        )
        self.chat_id = chat_id


class ChatNotFoundError(WhatsBotError):
    """The destination id could not be resolved to a chat."""

    def __init__(self, chat_id: str):
        super().__init__(f"Chat {chat_id} not found and could not be resolved")
        self.chat_id = chat_id


class ContactNotFoundError(WhatsBotError):
    """No contact with the given id is known to the page."""

    def __init__(self, contact_id: str):
        super().__init__(f"Contact {contact_id} not found")
        self.contact_id = contact_id
