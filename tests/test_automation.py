"""
Tests for automation handlers and the anti-delete cache.
"""

import pytest

from danuubot.auto_reply import content
from danuubot.auto_reply.cache import MessageCache
from danuubot.bus.events import STATUS_BROADCAST_JID, ReactionPayload
from danuubot.config.schema import ReactionsConfig

from conftest import CHAT, make_message


def revoke(deleted_id: str = "MSG1", msg_id: str = "REV1"):
    return make_message(
        msg_id=msg_id,
        message={"protocolMessage": {"type": 0, "key": {"remoteJid": CHAT, "id": deleted_id}}},
    )


class TestStatusView:
    """Tests for status auto-view."""

    @pytest.mark.asyncio
    async def test_views_and_reacts(self, automation, client):
        status = make_message("my status", jid=STATUS_BROADCAST_JID, participant="222@s.whatsapp.net")

        assert await automation.handle_status(status) is True

        assert client.read == [[status.key]]
        assert len(client.reactions) == 1
        reaction = client.reactions[0]
        assert reaction.chat_id == STATUS_BROADCAST_JID
        assert reaction.payload.emoji == "👻"
        assert reaction.payload.key == status.key

    @pytest.mark.asyncio
    async def test_disabled_flag(self, automation, client, flags):
        flags.set_auto_status_view(False)
        status = make_message("my status", jid=STATUS_BROADCAST_JID)

        assert await automation.handle_status(status) is False
        assert client.read == []
        assert client.sent == []

    @pytest.mark.asyncio
    async def test_ignores_own_status(self, automation, client):
        status = make_message("mine", jid=STATUS_BROADCAST_JID, from_me=True)

        assert await automation.handle_status(status) is False
        assert client.sent == []


class TestAutoReact:
    """Tests for generic auto-react."""

    @pytest.mark.asyncio
    async def test_reacts_to_plain_text(self, automation, client):
        message = make_message("good morning")

        assert await automation.handle_auto_react(message) is True
        assert len(client.reactions) == 1
        assert client.reactions[0].payload.emoji == "🔥"
        assert client.reactions[0].payload.key == message.key

    @pytest.mark.asyncio
    async def test_skips_commands(self, automation, client):
        assert await automation.handle_auto_react(make_message(".ping")) is False
        assert client.sent == []

    @pytest.mark.asyncio
    async def test_skips_status(self, automation, client):
        status = make_message("hi", jid=STATUS_BROADCAST_JID)

        assert await automation.handle_auto_react(status) is False

    @pytest.mark.asyncio
    async def test_independent_of_flags(self, automation, client, flags):
        flags.set_auto_status_view(False)
        flags.set_anti_delete(False)

        assert await automation.handle_auto_react(make_message("")) is True

    @pytest.mark.asyncio
    async def test_custom_emoji(self, client, flags):
        from danuubot.auto_reply.automation import AutomationHandlers

        handlers = AutomationHandlers(client, flags, reactions=ReactionsConfig(auto_react_emoji="❤️"))

        await handlers.handle_auto_react(make_message("yo"))

        assert isinstance(client.sent[0].payload, ReactionPayload)
        assert client.sent[0].payload.emoji == "❤️"


class TestAntiDelete:
    """Tests for anti-delete notices."""

    @pytest.mark.asyncio
    async def test_warning_without_cache(self, automation, client):
        assert await automation.handle_anti_delete(revoke()) is True
        assert client.texts == [content.ANTI_DELETE_WARNING]

    @pytest.mark.asyncio
    async def test_recovers_cached_body(self, automation, client):
        automation.remember(make_message("secret plan", msg_id="MSG1"))

        await automation.handle_anti_delete(revoke("MSG1"))

        assert client.texts == [f"{content.ANTI_DELETE_WARNING}\n\nsecret plan"]
        assert "MSG1" not in automation.cache

    @pytest.mark.asyncio
    async def test_empty_cache_passed_in_is_used(self, client, flags):
        from danuubot.auto_reply.automation import AutomationHandlers

        cache = MessageCache(max_size=5)
        handlers = AutomationHandlers(client, flags, cache=cache)
        handlers.remember(make_message("kept", msg_id="MSG1"))

        assert handlers.cache is cache
        await handlers.handle_anti_delete(revoke("MSG1"))
        assert client.texts == [f"{content.ANTI_DELETE_WARNING}\n\nkept"]

    @pytest.mark.asyncio
    async def test_revoke_from_other_chat_does_not_leak(self, automation, client):
        other_chat = "94770000000@s.whatsapp.net"
        automation.remember(make_message("secret from chat A", msg_id="SECRET1"))

        await automation.handle_anti_delete(make_message(
            jid=other_chat,
            msg_id="REV9",
            message={"protocolMessage": {"type": 0, "key": {"remoteJid": other_chat, "id": "SECRET1"}}},
        ))

        assert client.texts == [content.ANTI_DELETE_WARNING]
        assert client.sent[0].chat_id == other_chat
        assert "SECRET1" in automation.cache

    @pytest.mark.asyncio
    async def test_disabled_flag(self, automation, client, flags):
        flags.set_anti_delete(False)

        assert await automation.handle_anti_delete(revoke()) is False
        assert client.sent == []

    @pytest.mark.asyncio
    async def test_ignores_normal_messages(self, automation, client):
        assert await automation.handle_anti_delete(make_message("hello")) is False
        assert client.sent == []

    def test_revokes_are_not_cached(self, automation):
        automation.remember(revoke())

        assert len(automation.cache) == 0


class TestMessageCache:
    """Tests for the LRU message cache."""

    def test_evicts_oldest(self):
        cache = MessageCache(max_size=2)
        cache.remember("a", CHAT, CHAT, "one")
        cache.remember("b", CHAT, CHAT, "two")
        cache.remember("c", CHAT, CHAT, "three")

        assert "a" not in cache
        assert cache.get("b").text == "two"
        assert cache.get_stats()["total_evictions"] == 1

    def test_get_refreshes_recency(self):
        cache = MessageCache(max_size=2)
        cache.remember("a", CHAT, CHAT, "one")
        cache.remember("b", CHAT, CHAT, "two")
        cache.get("a")
        cache.remember("c", CHAT, CHAT, "three")

        assert "a" in cache
        assert "b" not in cache

    def test_zero_size_disables(self):
        cache = MessageCache(max_size=0)
        cache.remember("a", CHAT, CHAT, "one")

        assert len(cache) == 0

    def test_skips_empty_text(self):
        cache = MessageCache()
        cache.remember("a", CHAT, CHAT, "")

        assert len(cache) == 0

    def test_lookup_is_scoped_to_chat(self):
        cache = MessageCache()
        cache.remember("a", CHAT, CHAT, "one")

        assert cache.pop("a", chat_id="other@s.whatsapp.net") is None
        assert "a" in cache
        assert cache.pop("a", chat_id=CHAT).text == "one"
        assert "a" not in cache

    def test_stats(self):
        cache = MessageCache()
        cache.remember("a", CHAT, CHAT, "one")
        cache.get("a")
        cache.get("missing")

        stats = cache.get_stats()
        assert stats["total_hits"] == 1
        assert stats["total_misses"] == 1
        assert stats["hit_rate"] == "50.0%"
