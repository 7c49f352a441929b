"""Services package."""

from whatsbot.services.bootstrap import SessionBootstrap
from whatsbot.services.commands import CommandBridge
from whatsbot.services.events import EventBridge

__all__ = ["SessionBootstrap", "CommandBridge", "EventBridge"]
