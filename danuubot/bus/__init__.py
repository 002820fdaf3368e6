"""Event and payload types."""

from danuubot.bus.events import (
    STATUS_BROADCAST_JID,
    MessageKey,
    QuotedContext,
    InboundMessage,
    ConnectionUpdate,
    MessagesUpsert,
    TextPayload,
    ImagePayload,
    VideoPayload,
    AudioPayload,
    StickerPayload,
    ReactionPayload,
    OutboundMessage,
)

__all__ = [
    "STATUS_BROADCAST_JID",
    "MessageKey",
    "QuotedContext",
    "InboundMessage",
    "ConnectionUpdate",
    "MessagesUpsert",
    "TextPayload",
    "ImagePayload",
    "VideoPayload",
    "AudioPayload",
    "StickerPayload",
    "ReactionPayload",
    "OutboundMessage",
]
