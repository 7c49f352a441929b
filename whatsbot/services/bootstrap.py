"""Session bootstrap: inject the store, capture tokens, wait for readiness."""

import json
import logging
from typing import TYPE_CHECKING, Tuple

from whatsbot.injected import EXPOSE_STORE, LOAD_UTILS, load_script
from whatsbot.models import ClientInfo, Events, Session

if TYPE_CHECKING:
    from whatsbot.clients.page import InwardAPI
    from whatsbot.core.config import ClientOptions
    from whatsbot.core.emitter import EventEmitter

logger = logging.getLogger(__name__)

READ_LOCAL_STORAGE = "() => JSON.stringify(window.localStorage)"
SERIALIZE_CONN = "() => window.Store.Conn.serialize()"


class SessionBootstrap:
    """
    Brings a freshly loaded page to the point where bridges can attach.

    Steps, in order:
    1. inject the store exposure script (failures are logged, not raised)
    2. read local storage
    3. capture the session tokens and emit ``authenticated``
    4. wait, without timeout, for the store global
    5. install the helper namespace
    6. fetch the connection descriptor
    """

    def __init__(
        self,
        context: "InwardAPI",
        emitter: "EventEmitter",
        options: "ClientOptions",
    ):
        self.context = context
        self.emitter = emitter
        self.options = options

    async def run(self) -> Tuple[Session, ClientInfo]:
        """Run all steps. Anything after step 1 propagates on failure."""
        await self.inject_store()

        session = await self.read_session()
        logger.info("🔑 Session tokens captured")
        self.emitter.emit(Events.AUTHENTICATED, session)

        logger.info("⏳ Waiting for store injection...")
        await self.context.wait_for_function(self.options.store_ready_predicate)

        await self.context.evaluate(load_script(LOAD_UTILS))
        logger.info("✅ Helpers installed")

        info = ClientInfo.from_raw(await self.context.evaluate(SERIALIZE_CONN) or {})
        logger.info(f"👤 Logged in as {info.pushname or info.wid or 'unknown'}")
        return session, info

    async def inject_store(self) -> bool:
        """Evaluate the store exposure script; return whether it succeeded."""
        try:
            await self.context.evaluate(load_script(EXPOSE_STORE))
        except Exception as e:
            # The web app's module layout changes between releases.
            logger.warning(f"Store injection failed, continuing: {e}", exc_info=True)
            return False
        return True

    async def read_session(self) -> Session:
        raw = await self.context.evaluate(READ_LOCAL_STORAGE)
        storage = json.loads(raw) if raw else {}
        return Session.from_local_storage(storage)
