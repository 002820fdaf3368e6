"""
Parsing of raw bridge events into typed events.

Kept free of I/O so it can be tested with plain dicts. Parsing is tolerant:
missing or malformed fields become empty values instead of exceptions.
"""

from typing import Any

from danuubot.bus.events import (
    ConnectionUpdate,
    InboundMessage,
    MessageKey,
    MessagesUpsert,
    QuotedContext,
)

# proto.Message.ProtocolMessage.Type.REVOKE
REVOKE_TYPES = {0, "REVOKE"}

VIEW_ONCE_WRAPPERS = ("viewOnceMessage", "viewOnceMessageV2", "viewOnceMessageV2Extension")
VIEW_ONCE_MEDIA = (("image", "imageMessage"), ("video", "videoMessage"))


def _safe_dict(x: Any) -> dict:
    return x if isinstance(x, dict) else {}


def _safe_list(x: Any) -> list:
    return x if isinstance(x, list) else []


def parse_connection_update(data: dict[str, Any]) -> ConnectionUpdate:
    """Parse a ``connection.update`` payload."""
    data = _safe_dict(data)
    status_code = None

    last_disconnect = _safe_dict(data.get("lastDisconnect"))
    error = _safe_dict(last_disconnect.get("error"))
    # Boom errors carry the reason under output.statusCode
    raw_code = (
        _safe_dict(error.get("output")).get("statusCode")
        or last_disconnect.get("statusCode")
    )
    if raw_code is not None:
        try:
            status_code = int(raw_code)
        except (TypeError, ValueError):
            status_code = None

    return ConnectionUpdate(
        connection=data.get("connection") or None,
        qr=data.get("qr") or None,
        status_code=status_code,
    )


def parse_messages_upsert(data: dict[str, Any]) -> MessagesUpsert:
    """Parse a ``messages.upsert`` payload."""
    data = _safe_dict(data)
    messages = [m for m in _safe_list(data.get("messages")) if isinstance(m, dict)]
    return MessagesUpsert(type=str(data.get("type") or ""), messages=messages)


def extract_text(message: dict[str, Any]) -> str:
    """Get the user-visible text of a protocol message."""
    message = _safe_dict(message)
    text = (
        message.get("conversation")
        or _safe_dict(message.get("extendedTextMessage")).get("text")
        or _safe_dict(message.get("imageMessage")).get("caption")
        or ""
    )
    return str(text)


def extract_quoted(message: dict[str, Any]) -> QuotedContext | None:
    """Get the replied-to message, if the message is a reply."""
    context = _safe_dict(_safe_dict(message.get("extendedTextMessage")).get("contextInfo"))
    quoted = context.get("quotedMessage")
    if not isinstance(quoted, dict) or not quoted:
        return None
    return QuotedContext(
        participant=context.get("participant") or None,
        message=quoted,
        stanza_id=str(context.get("stanzaId") or ""),
    )


def extract_revoked_id(message: dict[str, Any]) -> str | None:
    """Return the deleted message id when this is a revoke notification."""
    protocol = message.get("protocolMessage")
    if not isinstance(protocol, dict):
        return None
    revoke_type = protocol.get("type", 0)
    if not isinstance(revoke_type, (int, str)) or revoke_type not in REVOKE_TYPES:
        return None
    return str(_safe_dict(protocol.get("key")).get("id") or "")


def extract_view_once_media(quoted: dict[str, Any]) -> tuple[str, dict[str, Any]] | None:
    """
    Find the media inside a view-once container.

    Returns:
        ``(media_type, media_message)`` with media_type "image" or "video",
        or None if the message is not a view-once image/video.
    """
    for wrapper in VIEW_ONCE_WRAPPERS:
        container = quoted.get(wrapper)
        if not isinstance(container, dict):
            continue
        content = _safe_dict(container.get("message"))
        for media_type, field_name in VIEW_ONCE_MEDIA:
            media = content.get(field_name)
            if isinstance(media, dict):
                return media_type, media
        return None
    return None


def is_view_once(quoted: dict[str, Any]) -> bool:
    return any(isinstance(quoted.get(w), dict) for w in VIEW_ONCE_WRAPPERS)


def parse_message(raw: dict[str, Any], upsert_type: str = "notify") -> InboundMessage:
    """Normalize a raw WebMessageInfo dict into an InboundMessage."""
    raw = _safe_dict(raw)
    key = MessageKey.from_dict(_safe_dict(raw.get("key")))
    message = _safe_dict(raw.get("message"))

    image = message.get("imageMessage")

    return InboundMessage(
        key=key,
        text=extract_text(message),
        sender_id=key.participant or key.remote_jid,
        quoted=extract_quoted(message),
        media=image if isinstance(image, dict) else None,
        upsert_type=upsert_type,
        revoked_id=extract_revoked_id(message),
        push_name=str(raw.get("pushName") or ""),
        raw=message,
    )
