"""Chat and contact models."""

from typing import Any, Optional
from pydantic import BaseModel, Field


def _serialized(value: Any) -> str:
    if isinstance(value, dict):
        return value.get("_serialized", "")
    return value or ""


class Contact(BaseModel):
    """A contact known to the logged-in account."""

    id: str
    number: Optional[str] = None
    name: Optional[str] = None
    pushname: Optional[str] = None
    short_name: Optional[str] = None
    is_me: bool = False
    is_user: bool = False
    is_group: bool = False
    is_business: bool = False
    is_my_contact: bool = False
    is_blocked: bool = False
    raw: dict[str, Any] = Field(default_factory=dict, repr=False)

    @classmethod
    def from_raw(cls, data: dict[str, Any]) -> "Contact":
        raw_id = data.get("id") or {}
        return cls(
            id=_serialized(raw_id),
            number=raw_id.get("user") if isinstance(raw_id, dict) else None,
            name=data.get("name"),
            pushname=data.get("pushname"),
            short_name=data.get("shortName"),
            is_me=bool(data.get("isMe")),
            is_user=bool(data.get("isUser")),
            is_group=bool(data.get("isGroup")),
            is_business=bool(data.get("isBusiness")),
            is_my_contact=bool(data.get("isMyContact")),
            is_blocked=bool(data.get("isBlocked")),
            raw=data,
        )


class Chat(BaseModel):
    """A conversation, either private or group."""

    id: str
    name: Optional[str] = None
    is_group: bool = False
    is_read_only: bool = False
    unread_count: int = 0
    timestamp: Optional[int] = None
    archived: bool = False
    pinned: bool = False
    is_muted: bool = False
    raw: dict[str, Any] = Field(default_factory=dict, repr=False)

    @classmethod
    def from_raw(cls, data: dict[str, Any]) -> "Chat":
        return cls(
            id=_serialized(data.get("id")),
            name=data.get("formattedTitle") or data.get("name"),
            is_group=bool(data.get("isGroup")),
            is_read_only=bool(data.get("isReadOnly")),
            unread_count=data.get("unreadCount") or 0,
            timestamp=data.get("t"),
            archived=bool(data.get("archive")),
            pinned=bool(data.get("pin")),
            is_muted=bool(data.get("isMuted")),
            raw=data,
        )


class GroupChat(Chat):
    """A group conversation with its participant list."""

    owner: Optional[str] = None
    description: Optional[str] = None
    participants: list[dict[str, Any]] = Field(default_factory=list)

    @classmethod
    def from_raw(cls, data: dict[str, Any]) -> "GroupChat":
        base = Chat.from_raw(data)
        metadata = data.get("groupMetadata") or {}
        participants = [
            {
                "id": _serialized(p.get("id")),
                "is_admin": bool(p.get("isAdmin")),
                "is_super_admin": bool(p.get("isSuperAdmin")),
            }
            for p in metadata.get("participants") or []
        ]
        return cls(
            **base.model_dump(),
            owner=_serialized(metadata.get("owner")) or None,
            description=metadata.get("desc"),
            participants=participants,
        )


def create_chat(data: dict[str, Any]) -> Chat:
    """Build the right chat type for a serialized chat record."""
    if data.get("isGroup"):
        return GroupChat.from_raw(data)
    return Chat.from_raw(data)
