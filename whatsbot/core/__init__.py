"""Core runtime components for whatsbot."""

from whatsbot.core.client import Client
from whatsbot.core.config import ClientOptions, load_config
from whatsbot.core.emitter import EventEmitter

__all__ = ["Client", "ClientOptions", "load_config", "EventEmitter"]
