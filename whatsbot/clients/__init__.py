"""Remote execution context adapters."""

from whatsbot.clients.page import InwardAPI, OutwardAPI, PlaywrightContext, RemoteContext

__all__ = ["InwardAPI", "OutwardAPI", "PlaywrightContext", "RemoteContext"]
