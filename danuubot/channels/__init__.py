"""Messaging clients for DanuuBot."""

from danuubot.channels.base import BridgeError, MessagingClient
from danuubot.channels.whatsapp import BridgeClient

__all__ = ["BridgeError", "MessagingClient", "BridgeClient"]
