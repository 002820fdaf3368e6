"""
Event types exchanged between the messaging client and the bot.

Inbound side:
- ConnectionUpdate / MessagesUpsert as emitted by the bridge
- InboundMessage, the normalized view handed to handlers

Outbound side:
- OutboundMessage with one payload variant per content kind
"""

import base64
from dataclasses import dataclass, field
from typing import Any

STATUS_BROADCAST_JID = "status@broadcast"


@dataclass(frozen=True)
class MessageKey:
    """Protocol key identifying a single message."""
    remote_jid: str
    id: str = ""
    from_me: bool = False
    participant: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire form expected by the bridge."""
        data: dict[str, Any] = {
            "remoteJid": self.remote_jid,
            "id": self.id,
            "fromMe": self.from_me,
        }
        if self.participant:
            data["participant"] = self.participant
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MessageKey":
        """Create from the wire form."""
        return cls(
            remote_jid=str(data.get("remoteJid") or ""),
            id=str(data.get("id") or ""),
            from_me=bool(data.get("fromMe", False)),
            participant=data.get("participant") or None,
        )


@dataclass
class QuotedContext:
    """The message a user replied to."""
    participant: str | None
    message: dict[str, Any] = field(default_factory=dict)
    stanza_id: str = ""


@dataclass
class InboundMessage:
    """A normalized message received from the client."""
    key: MessageKey
    text: str = ""
    sender_id: str = ""
    quoted: QuotedContext | None = None
    media: dict[str, Any] | None = None  # Attached imageMessage, if any
    upsert_type: str = "notify"
    revoked_id: str | None = None  # Set on revoke notifications
    push_name: str = ""
    raw: dict[str, Any] = field(default_factory=dict)

    @property
    def chat_id(self) -> str:
        return self.key.remote_jid

    @property
    def from_me(self) -> bool:
        return self.key.from_me

    @property
    def is_status(self) -> bool:
        return self.key.remote_jid == STATUS_BROADCAST_JID

    @property
    def is_revoke(self) -> bool:
        return self.revoked_id is not None

    @property
    def has_payload(self) -> bool:
        return bool(self.raw)


@dataclass
class ConnectionUpdate:
    """Connection state change reported by the client."""
    connection: str | None = None  # "open", "close", "connecting"
    qr: str | None = None
    status_code: int | None = None


@dataclass
class MessagesUpsert:
    """Batch of new messages reported by the client."""
    type: str
    messages: list[dict[str, Any]] = field(default_factory=list)


# ----------------------------------------------------------------------------
# Outbound payloads
# ----------------------------------------------------------------------------


def _b64(data: bytes) -> dict[str, str]:
    return {"base64": base64.b64encode(data).decode("ascii")}


@dataclass
class TextPayload:
    text: str

    def to_content(self) -> dict[str, Any]:
        return {"text": self.text}


@dataclass
class ImagePayload:
    """Image by URL or raw bytes."""
    url: str | None = None
    data: bytes | None = None
    caption: str = ""

    def to_content(self) -> dict[str, Any]:
        source = {"url": self.url} if self.url else _b64(self.data or b"")
        content: dict[str, Any] = {"image": source}
        if self.caption:
            content["caption"] = self.caption
        return content


@dataclass
class VideoPayload:
    data: bytes
    caption: str = ""

    def to_content(self) -> dict[str, Any]:
        content: dict[str, Any] = {"video": _b64(self.data)}
        if self.caption:
            content["caption"] = self.caption
        return content


@dataclass
class AudioPayload:
    url: str
    file_name: str
    caption: str = ""
    mimetype: str = "audio/mp4"
    ptt: bool = False

    def to_content(self) -> dict[str, Any]:
        return {
            "audio": {"url": self.url},
            "mimetype": self.mimetype,
            "ptt": self.ptt,
            "fileName": self.file_name,
            "caption": self.caption,
        }


@dataclass
class StickerPayload:
    data: bytes

    def to_content(self) -> dict[str, Any]:
        return {"sticker": _b64(self.data)}


@dataclass
class ReactionPayload:
    emoji: str
    key: MessageKey

    def to_content(self) -> dict[str, Any]:
        return {"react": {"text": self.emoji, "key": self.key.to_dict()}}


Payload = TextPayload | ImagePayload | VideoPayload | AudioPayload | StickerPayload | ReactionPayload


@dataclass
class OutboundMessage:
    """A message to send to a chat."""
    chat_id: str
    payload: Payload

    def to_content(self) -> dict[str, Any]:
        return self.payload.to_content()
