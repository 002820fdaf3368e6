"""
Tests for raw event parsing.
"""

import pytest

from danuubot.bus.events import STATUS_BROADCAST_JID, MessageKey
from danuubot.channels.parsing import (
    extract_quoted,
    extract_text,
    extract_view_once_media,
    is_view_once,
    parse_connection_update,
    parse_message,
    parse_messages_upsert,
)

from conftest import CHAT, make_raw


class TestExtractText:
    """Tests for text extraction precedence."""

    def test_conversation(self):
        assert extract_text({"conversation": "hello"}) == "hello"

    def test_extended_text(self):
        assert extract_text({"extendedTextMessage": {"text": ".getdp"}}) == ".getdp"

    def test_image_caption(self):
        assert extract_text({"imageMessage": {"caption": ".sticker"}}) == ".sticker"

    def test_conversation_wins(self):
        message = {"conversation": "a", "extendedTextMessage": {"text": "b"}}

        assert extract_text(message) == "a"

    @pytest.mark.parametrize("message", [{}, None, {"extendedTextMessage": "junk"}, {"audioMessage": {}}])
    def test_missing_text_is_empty(self, message):
        assert extract_text(message) == ""


class TestConnectionUpdate:
    """Tests for connection.update parsing."""

    def test_boom_status_code(self):
        update = parse_connection_update({
            "connection": "close",
            "lastDisconnect": {"error": {"output": {"statusCode": 401}}},
        })

        assert update.connection == "close"
        assert update.status_code == 401

    def test_flat_status_code(self):
        update = parse_connection_update({"connection": "close", "lastDisconnect": {"statusCode": "515"}})

        assert update.status_code == 515

    def test_qr_only(self):
        update = parse_connection_update({"qr": "2@xyz"})

        assert update.connection is None
        assert update.qr == "2@xyz"
        assert update.status_code is None

    def test_garbage(self):
        update = parse_connection_update("not a dict")

        assert update.connection is None
        assert update.status_code is None


class TestMessagesUpsert:
    """Tests for messages.upsert parsing."""

    def test_keeps_dict_messages(self):
        upsert = parse_messages_upsert({"type": "notify", "messages": [make_raw("hi"), "bad", None]})

        assert upsert.type == "notify"
        assert len(upsert.messages) == 1

    def test_missing_messages(self):
        upsert = parse_messages_upsert({"type": "append"})

        assert upsert.messages == []


class TestParseMessage:
    """Tests for message normalization."""

    def test_direct_message(self):
        message = parse_message(make_raw("hello"))

        assert message.key == MessageKey(remote_jid=CHAT, id="MSG1")
        assert message.chat_id == CHAT
        assert message.sender_id == CHAT
        assert message.text == "hello"
        assert message.push_name == "Nimal"
        assert message.has_payload
        assert not message.is_status
        assert not message.is_revoke

    def test_group_sender_is_participant(self):
        message = parse_message(make_raw("hi", jid="123@g.us", participant="555@s.whatsapp.net"))

        assert message.chat_id == "123@g.us"
        assert message.sender_id == "555@s.whatsapp.net"

    def test_status_message(self):
        message = parse_message(make_raw("story", jid=STATUS_BROADCAST_JID))

        assert message.is_status

    def test_no_payload(self):
        message = parse_message({"key": {"remoteJid": CHAT, "id": "X"}})

        assert not message.has_payload
        assert message.text == ""

    def test_upsert_type_is_kept(self):
        assert parse_message(make_raw("hi"), upsert_type="append").upsert_type == "append"

    def test_image_media(self):
        image = {"mimetype": "image/jpeg", "caption": ".sticker"}
        message = parse_message(make_raw(message={"imageMessage": image}))

        assert message.media == image
        assert message.text == ".sticker"

    @pytest.mark.parametrize("revoke_type", [0, "REVOKE"])
    def test_revoke(self, revoke_type):
        raw = make_raw(message={"protocolMessage": {"type": revoke_type, "key": {"id": "GONE"}}})

        message = parse_message(raw)

        assert message.is_revoke
        assert message.revoked_id == "GONE"

    def test_other_protocol_messages_are_not_revokes(self):
        raw = make_raw(message={"protocolMessage": {"type": 3}})

        assert not parse_message(raw).is_revoke

    @pytest.mark.parametrize("revoke_type", [["x"], {"name": "REVOKE"}, None, 0.5])
    def test_malformed_revoke_type(self, revoke_type):
        raw = make_raw(None, message={"protocolMessage": {"type": revoke_type, "key": {"id": "GONE"}}})

        message = parse_message(raw)

        assert not message.is_revoke
        assert message.revoked_id is None


class TestQuoted:
    """Tests for reply context and view-once unwrapping."""

    def test_quoted_reply(self):
        message = {
            "extendedTextMessage": {
                "text": ".getdp",
                "contextInfo": {
                    "participant": "777@s.whatsapp.net",
                    "stanzaId": "Q1",
                    "quotedMessage": {"conversation": "original"},
                },
            }
        }

        quoted = extract_quoted(message)

        assert quoted.participant == "777@s.whatsapp.net"
        assert quoted.stanza_id == "Q1"
        assert quoted.message == {"conversation": "original"}

    def test_not_a_reply(self):
        assert extract_quoted({"extendedTextMessage": {"text": "hi"}}) is None
        assert extract_quoted({"conversation": "hi"}) is None

    @pytest.mark.parametrize("wrapper", ["viewOnceMessage", "viewOnceMessageV2", "viewOnceMessageV2Extension"])
    def test_view_once_image(self, wrapper):
        quoted = {wrapper: {"message": {"imageMessage": {"url": "x"}}}}

        assert is_view_once(quoted)
        assert extract_view_once_media(quoted) == ("image", {"url": "x"})

    def test_view_once_video(self):
        quoted = {"viewOnceMessageV2": {"message": {"videoMessage": {"seconds": 5}}}}

        assert extract_view_once_media(quoted) == ("video", {"seconds": 5})

    def test_view_once_without_media(self):
        quoted = {"viewOnceMessage": {"message": {"audioMessage": {}}}}

        assert is_view_once(quoted)
        assert extract_view_once_media(quoted) is None

    def test_plain_image_is_not_view_once(self):
        quoted = {"imageMessage": {"url": "x"}}

        assert not is_view_once(quoted)
        assert extract_view_once_media(quoted) is None
