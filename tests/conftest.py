"""
Pytest configuration and shared fixtures for DanuuBot tests.
"""

import pytest
import sys
from pathlib import Path
from typing import Any

# Add the project root to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from danuubot.auto_reply.automation import AutomationHandlers
from danuubot.auto_reply.cache import MessageCache
from danuubot.auto_reply.dispatch import CommandDispatcher
from danuubot.auto_reply.flags import FeatureFlags
from danuubot.bus.events import MessageKey, OutboundMessage, ReactionPayload, TextPayload
from danuubot.channels.base import BridgeError, MessagingClient
from danuubot.channels.parsing import parse_message
from danuubot.routing.router import EventRouter

CHAT = "94771234567@s.whatsapp.net"


class FakeClient(MessagingClient):
    """In-memory MessagingClient recording every call."""

    name = "fake"

    def __init__(self, sessions: list[list[tuple[str, dict[str, Any]]]] | None = None):
        self.sessions = sessions or []
        self.sent: list[OutboundMessage] = []
        self.read: list[list[MessageKey]] = []
        self.downloads: list[dict[str, Any]] = []
        self.profile_lookups: list[tuple[str, str]] = []
        self.media = b"media-bytes"
        self.dp_url: str | None = None
        self.dp_error: Exception | None = None
        self.fail_payload: type | None = None
        self.connect_calls = 0
        self.closed = False

    async def connect(self) -> None:
        self.connect_calls += 1

    async def close(self) -> None:
        self.closed = True

    async def events(self):
        index = self.connect_calls - 1
        if index >= len(self.sessions):
            return
        for event in self.sessions[index]:
            if isinstance(event, Exception):
                raise event
            yield event

    async def send_message(self, message: OutboundMessage) -> dict[str, Any]:
        if self.fail_payload is not None and isinstance(message.payload, self.fail_payload):
            raise BridgeError("send failed")
        self.sent.append(message)
        return {"key": {"id": f"OUT{len(self.sent)}"}}

    async def read_messages(self, keys: list[MessageKey]) -> None:
        self.read.append(keys)

    async def download_media_message(self, message: dict[str, Any]) -> bytes:
        self.downloads.append(message)
        return self.media

    async def profile_picture_url(self, jid: str, kind: str = "image") -> str | None:
        self.profile_lookups.append((jid, kind))
        if self.dp_error is not None:
            raise self.dp_error
        return self.dp_url

    # Helpers for assertions

    @property
    def texts(self) -> list[str]:
        return [m.payload.text for m in self.sent if isinstance(m.payload, TextPayload)]

    @property
    def reactions(self) -> list[OutboundMessage]:
        return [m for m in self.sent if isinstance(m.payload, ReactionPayload)]


def make_raw(
    text: str | None = "",
    jid: str = CHAT,
    msg_id: str = "MSG1",
    from_me: bool = False,
    participant: str | None = None,
    message: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a raw WebMessageInfo dict as the bridge sends it."""
    key: dict[str, Any] = {"remoteJid": jid, "id": msg_id, "fromMe": from_me}
    if participant:
        key["participant"] = participant
    if message is None:
        message = {"conversation": text} if text is not None else {}
    return {"key": key, "pushName": "Nimal", "message": message}


def make_message(text: str = "", **kwargs):
    return parse_message(make_raw(text, **kwargs))


def upsert(raw: dict[str, Any], upsert_type: str = "notify") -> tuple[str, dict[str, Any]]:
    return "messages.upsert", {"type": upsert_type, "messages": [raw]}


@pytest.fixture
def client():
    return FakeClient()


@pytest.fixture
def flags():
    return FeatureFlags(auto_status_view=True, anti_delete=True)


@pytest.fixture
def dispatcher(client, flags):
    return CommandDispatcher(client, flags)


@pytest.fixture
def automation(client, flags):
    return AutomationHandlers(client, flags, cache=MessageCache(max_size=10))


@pytest.fixture
def router(dispatcher, automation):
    return EventRouter(dispatcher, automation)
