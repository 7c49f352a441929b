"""Session and connection state models."""

from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field


class WAState(str, Enum):
    """Connection states reported by the in-page AppState store."""

    CONFLICT = "CONFLICT"
    CONNECTED = "CONNECTED"
    DEPRECATED_VERSION = "DEPRECATED_VERSION"
    OPENING = "OPENING"
    PAIRING = "PAIRING"
    PROXYBLOCK = "PROXYBLOCK"
    SMB_TOS_BLOCK = "SMB_TOS_BLOCK"
    TIMEOUT = "TIMEOUT"
    TOS_BLOCK = "TOS_BLOCK"
    UNLAUNCHED = "UNLAUNCHED"
    UNPAIRED = "UNPAIRED"
    UNPAIRED_IDLE = "UNPAIRED_IDLE"


# Any state outside this set ends the session.
ACCEPTED_STATES = frozenset(
    {WAState.CONNECTED, WAState.OPENING, WAState.PAIRING, WAState.TIMEOUT}
)


def is_accepted_state(state: str) -> bool:
    """Check whether a raw state string keeps the session alive."""
    return state in {s.value for s in ACCEPTED_STATES}


class Session(BaseModel):
    """Authentication tokens captured from the page's local storage."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    browser_id: Optional[str] = Field(None, alias="WABrowserId")
    secret_bundle: Optional[str] = Field(None, alias="WASecretBundle")
    token1: Optional[str] = Field(None, alias="WAToken1")
    token2: Optional[str] = Field(None, alias="WAToken2")

    @classmethod
    def from_local_storage(cls, storage: dict[str, Any]) -> "Session":
        """Pick the four session keys out of a local storage snapshot."""
        return cls(
            WABrowserId=storage.get("WABrowserId"),
            WASecretBundle=storage.get("WASecretBundle"),
            WAToken1=storage.get("WAToken1"),
            WAToken2=storage.get("WAToken2"),
        )

    def to_local_storage(self) -> dict[str, Optional[str]]:
        """Dump back to the local storage key names."""
        return self.model_dump(by_alias=True)


class ClientInfo(BaseModel):
    """Descriptor of the logged-in account (serialized `Store.Conn`)."""

    pushname: Optional[str] = None
    me: dict[str, Any] = Field(default_factory=dict)
    platform: Optional[str] = None
    phone: dict[str, Any] = Field(default_factory=dict)
    raw: dict[str, Any] = Field(default_factory=dict, repr=False)

    @classmethod
    def from_raw(cls, data: dict[str, Any]) -> "ClientInfo":
        return cls(
            pushname=data.get("pushname"),
            me=data.get("me") or {},
            platform=data.get("platform"),
            phone=data.get("phone") or {},
            raw=data,
        )

    @property
    def wid(self) -> Optional[str]:
        """Serialized id of the current user."""
        return self.me.get("_serialized")
