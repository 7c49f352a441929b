"""Event names published to the host."""

from enum import Enum


class Events(str, Enum):
    """Events emitted by the client."""

    AUTHENTICATED = "authenticated"
    READY = "ready"
    MESSAGE_CREATE = "message_create"
    MESSAGE_RECEIVED = "message_received"
    MESSAGE_REVOKED_EVERYONE = "message_revoked_everyone"
    MESSAGE_REMOVED_BY_ME = "message_removed_by_me"
    MESSAGE_ACK = "message_ack"
    STATE_CHANGED = "state_changed"
    DISCONNECTED = "disconnected"
