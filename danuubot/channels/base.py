"""Base interface for messaging clients."""

from abc import ABC, abstractmethod
from typing import Any, AsyncIterator

from danuubot.bus.events import MessageKey, OutboundMessage


class BridgeError(RuntimeError):
    """Raised when the messaging client fails to complete a call."""


class MessagingClient(ABC):
    """
    Abstract connection to the messaging network.

    Implementations own the protocol session (pairing, encryption, media
    encoding, credentials). The bot only sends content and consumes raw
    events through this interface.
    """

    name: str = "base"

    @abstractmethod
    async def connect(self) -> None:
        """Start (or restart) the protocol session."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release the session and any network resources."""
        pass

    @abstractmethod
    def events(self) -> AsyncIterator[tuple[str, dict[str, Any]]]:
        """
        Iterate over raw events as ``(event_name, data)`` pairs.

        The iterator ends when the underlying stream drops.
        """
        pass

    @abstractmethod
    async def send_message(self, message: OutboundMessage) -> dict[str, Any]:
        """Send a message and return the client's acknowledgment."""
        pass

    @abstractmethod
    async def read_messages(self, keys: list[MessageKey]) -> None:
        """Mark messages as read."""
        pass

    @abstractmethod
    async def download_media_message(self, message: dict[str, Any]) -> bytes:
        """Download and decrypt the media of a raw protocol message."""
        pass

    @abstractmethod
    async def profile_picture_url(self, jid: str, kind: str = "image") -> str | None:
        """Look up a profile picture URL, or None when there is none."""
        pass
