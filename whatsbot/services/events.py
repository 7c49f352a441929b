"""Event bridge: in-page store notifications → host events."""

import asyncio
import functools
import logging
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Optional, Union

from whatsbot.injected import LISTENERS, load_script
from whatsbot.models import Events, Message, WAState, is_accepted_state

if TYPE_CHECKING:
    from whatsbot.clients.page import RemoteContext
    from whatsbot.core.emitter import EventEmitter

logger = logging.getLogger(__name__)


def _isolated(method: Callable[..., None]) -> Callable[..., None]:
    """Keep a failing notification from surfacing back into the page."""

    @functools.wraps(method)
    def wrapper(self: "EventBridge", *args: Any) -> None:
        if self.detached:
            logger.debug(f"Dropping {method.__name__} after teardown")
            return
        try:
            method(self, *args)
        except Exception:
            logger.exception(f"Failed to handle {method.__name__} notification")

    return wrapper


def _record_id(raw: Optional[dict]) -> Optional[str]:
    if not raw:
        return None
    raw_id = raw.get("id")
    if isinstance(raw_id, dict):
        return raw_id.get("id")
    return raw_id


def _coerce_state(state: str) -> Union[WAState, str]:
    try:
        return WAState(state)
    except ValueError:
        return state


class EventBridge:
    """
    Subscribes once per session to the store's change notifications and
    republishes them as host events.

    Keeps one piece of state: the last non-revoked message record seen on
    a generic change. The store mutates messages in place before the
    revoke notification fires, so this snapshot is the only way to hand
    out the pre-revocation content.
    """

    def __init__(
        self,
        context: "RemoteContext",
        emitter: "EventEmitter",
        on_disconnect: Optional[Callable[[], Awaitable[None]]] = None,
    ):
        self.context = context
        self.emitter = emitter
        self.on_disconnect = on_disconnect
        self.last_seen: Optional[dict] = None
        self.attached = False
        self.detached = False
        self._teardown_task: Optional[asyncio.Task] = None

    async def attach(self) -> None:
        """Expose the host callbacks and install the in-page listeners."""
        if self.attached:
            return

        bindings = {
            "onAddMessageEvent": self.on_add_message,
            "onChangeMessageEvent": self.on_change_message,
            "onChangeMessageTypeEvent": self.on_change_message_type,
            "onRemoveMessageEvent": self.on_remove_message,
            "onMessageAckEvent": self.on_message_ack,
            "onAppStateChangedEvent": self.on_app_state_changed,
        }
        for name, callback in bindings.items():
            await self.context.expose(name, callback)

        await self.context.evaluate(load_script(LISTENERS))
        self.attached = True
        logger.info("📡 Event bridge attached")

    def detach(self) -> None:
        """Stop republishing and forget the cached record."""
        self.detached = True
        self.last_seen = None

    @_isolated
    def on_add_message(self, raw: dict) -> None:
        if not raw.get("isNewMsg"):
            return

        message = Message.from_raw(raw)
        logger.debug(f"📨 New message {message.id.serialized}")
        self.emitter.emit(Events.MESSAGE_CREATE, message)

        if message.from_me:
            return
        self.emitter.emit(Events.MESSAGE_RECEIVED, message)

    @_isolated
    def on_change_message(self, raw: dict) -> None:
        if raw.get("type") != "revoked":
            self.last_seen = raw

    @_isolated
    def on_change_message_type(self, raw: dict) -> None:
        if raw.get("type") != "revoked":
            return

        message = Message.from_raw(raw)
        previous = None
        if self.last_seen is not None and _record_id(self.last_seen) == _record_id(raw):
            previous = Message.from_raw(self.last_seen)

        logger.debug(
            f"🗑️ Message {message.id.serialized} revoked "
            f"({'with' if previous else 'without'} previous state)"
        )
        self.emitter.emit(Events.MESSAGE_REVOKED_EVERYONE, message, previous)

    @_isolated
    def on_remove_message(self, raw: dict) -> None:
        if not raw.get("isNewMsg"):
            return
        self.emitter.emit(Events.MESSAGE_REMOVED_BY_ME, Message.from_raw(raw))

    @_isolated
    def on_message_ack(self, raw: dict, ack: int) -> None:
        self.emitter.emit(Events.MESSAGE_ACK, Message.from_raw(raw), ack)

    @_isolated
    def on_app_state_changed(self, state: str) -> None:
        logger.info(f"🔌 Connection state: {state}")
        self.emitter.emit(Events.STATE_CHANGED, _coerce_state(state))

        if is_accepted_state(state):
            return

        logger.warning(f"⚠️ Disconnected ({state}), tearing down")
        self.emitter.emit(Events.DISCONNECTED, _coerce_state(state))
        if self.on_disconnect is not None:
            self._teardown_task = asyncio.ensure_future(self.on_disconnect())
            self._teardown_task.add_done_callback(self._teardown_done)

    def _teardown_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(f"Teardown after disconnect failed: {exc}", exc_info=exc)

    async def wait_teardown(self) -> None:
        """Wait for a disconnect-triggered teardown, if one was started."""
        if self._teardown_task is not None:
            await asyncio.gather(self._teardown_task, return_exceptions=True)
