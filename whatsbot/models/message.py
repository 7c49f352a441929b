"""Message models built from serialized in-page records."""

import base64
import mimetypes
from enum import IntEnum
from pathlib import Path
from typing import Any, Optional

import httpx
from pydantic import BaseModel, Field


class MessageAck(IntEnum):
    """Delivery/read acknowledgement values."""

    ACK_ERROR = -1
    ACK_PENDING = 0
    ACK_SERVER = 1
    ACK_DEVICE = 2
    ACK_READ = 3
    ACK_PLAYED = 4


class MessageId(BaseModel):
    """Composite message identifier as serialized by the page."""

    from_me: bool = False
    remote: str = ""
    id: str = ""
    serialized: str = ""

    @classmethod
    def from_raw(cls, data: Any) -> "MessageId":
        if isinstance(data, str):
            return cls(serialized=data)
        data = data or {}
        remote = data.get("remote", "")
        if isinstance(remote, dict):
            remote = remote.get("_serialized", "")
        return cls(
            from_me=bool(data.get("fromMe", False)),
            remote=remote,
            id=data.get("id", ""),
            serialized=data.get("_serialized", ""),
        )


class Location(BaseModel):
    """A geographic location that can be sent or received."""

    latitude: float
    longitude: float
    description: Optional[str] = None


class MessageMedia(BaseModel):
    """Media attachment; `data` holds base64 encoded bytes."""

    mimetype: str
    data: str
    filename: Optional[str] = None

    @classmethod
    def from_file(cls, path: str) -> "MessageMedia":
        """Load an attachment from the local filesystem."""
        file_path = Path(path)
        mimetype, _ = mimetypes.guess_type(file_path.name)
        data = base64.b64encode(file_path.read_bytes()).decode("ascii")
        return cls(
            mimetype=mimetype or "application/octet-stream",
            data=data,
            filename=file_path.name,
        )

    @classmethod
    async def from_url(cls, url: str, filename: Optional[str] = None) -> "MessageMedia":
        """Download an attachment over HTTP."""
        async with httpx.AsyncClient(follow_redirects=True) as client:
            response = await client.get(url)
            response.raise_for_status()

        mimetype = response.headers.get("content-type", "").split(";")[0].strip()
        if not mimetype:
            mimetype = mimetypes.guess_type(url)[0] or "application/octet-stream"
        return cls(
            mimetype=mimetype,
            data=base64.b64encode(response.content).decode("ascii"),
            filename=filename or Path(httpx.URL(url).path).name or None,
        )


class Message(BaseModel):
    """A chat message as seen at the moment it was serialized."""

    id: MessageId
    body: str = ""
    type: str = "chat"
    timestamp: Optional[int] = None
    from_: Optional[str] = Field(None, description="Sender id")
    to: Optional[str] = None
    author: Optional[str] = Field(None, description="Group member who sent it")
    ack: Optional[int] = None
    has_media: bool = False
    has_quoted_msg: bool = False
    is_forwarded: bool = False
    broadcast: bool = False
    is_new_msg: bool = False
    location: Optional[Location] = None
    mentioned_ids: list[str] = Field(default_factory=list)
    raw: dict[str, Any] = Field(default_factory=dict, repr=False)

    @classmethod
    def from_raw(cls, data: dict[str, Any]) -> "Message":
        """Build a message from the record produced by `WWebJS.getMessageModel`."""
        location = None
        lat, lng = data.get("lat"), data.get("lng")
        if data.get("type") == "location" and lat is not None and lng is not None:
            location = Location(
                latitude=lat,
                longitude=lng,
                description=data.get("loc"),
            )

        return cls(
            id=MessageId.from_raw(data.get("id")),
            body=data.get("body") or "",
            type=data.get("type") or "chat",
            timestamp=data.get("t"),
            from_=_wid(data.get("from")),
            to=_wid(data.get("to")),
            author=_wid(data.get("author")),
            ack=data.get("ack"),
            has_media=bool(data.get("mediaKey")) or bool(data.get("hasMedia")),
            has_quoted_msg=bool(data.get("quotedMsg")) or bool(data.get("hasQuotedMsg")),
            is_forwarded=bool(data.get("isForwarded")),
            broadcast=bool(data.get("broadcast")),
            is_new_msg=bool(data.get("isNewMsg")),
            location=location,
            mentioned_ids=[_wid(j) for j in data.get("mentionedJidList") or []],
            raw=data,
        )

    @property
    def from_me(self) -> bool:
        return self.id.from_me


def _wid(value: Any) -> Optional[str]:
    """Flatten a serialized wid (string or `{_serialized}` dict)."""
    if isinstance(value, dict):
        return value.get("_serialized")
    return value
