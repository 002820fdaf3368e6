"""
Automation handlers that run without an explicit command.

- Status auto-view: mark statuses read and react to them
- Auto-react: react to every non-command chat message
- Anti-delete: announce deleted messages, with the body when remembered
"""

from loguru import logger

from danuubot.auto_reply import content
from danuubot.auto_reply.cache import MessageCache
from danuubot.auto_reply.flags import FeatureFlags
from danuubot.bus.events import InboundMessage, OutboundMessage, ReactionPayload, TextPayload
from danuubot.channels.base import MessagingClient
from danuubot.config.schema import ReactionsConfig


class AutomationHandlers:
    """Side-effect-only handlers triggered by qualifying events."""

    def __init__(
        self,
        client: MessagingClient,
        flags: FeatureFlags,
        cache: MessageCache | None = None,
        reactions: ReactionsConfig | None = None,
        prefix: str = ".",
    ):
        self.client = client
        self.flags = flags
        self.cache = cache if cache is not None else MessageCache(max_size=0)
        self.reactions = reactions if reactions is not None else ReactionsConfig()
        self.prefix = prefix

    async def handle_status(self, message: InboundMessage) -> bool:
        """
        View and react to a status update.

        Returns:
            True if the status was viewed.
        """
        if not self.flags.is_auto_status_view_enabled():
            return False
        if not message.is_status or message.from_me:
            return False

        logger.info(f"New status update from {message.sender_id}, auto-viewing and reacting")
        await self.client.read_messages([message.key])
        await self.client.send_message(OutboundMessage(
            message.chat_id,
            ReactionPayload(emoji=self.reactions.status_emoji, key=message.key),
        ))
        return True

    async def handle_auto_react(self, message: InboundMessage) -> bool:
        """React to any chat message that is not a command."""
        if message.is_status or message.text.lower().startswith(self.prefix):
            return False

        await self.client.send_message(OutboundMessage(
            message.chat_id,
            ReactionPayload(emoji=self.reactions.auto_react_emoji, key=message.key),
        ))
        return True

    def remember(self, message: InboundMessage) -> None:
        """Keep the message body around in case it gets deleted."""
        if message.is_revoke:
            return
        self.cache.remember(message.key.id, message.chat_id, message.sender_id, message.text)

    async def handle_anti_delete(self, message: InboundMessage) -> bool:
        """
        Announce a revoked message.

        Returns:
            True if a notice was sent.
        """
        if not self.flags.is_anti_delete_enabled() or not message.is_revoke:
            return False

        text = content.ANTI_DELETE_WARNING
        original = None
        if message.revoked_id:
            original = self.cache.pop(message.revoked_id, chat_id=message.chat_id)
        if original is not None:
            text = f"{text}\n\n{original.text}"
            logger.info(f"Recovered deleted message {original.message_id} in {message.chat_id}")
        else:
            logger.info(f"Message deleted in {message.chat_id}, body not cached")

        await self.client.send_message(OutboundMessage(message.chat_id, TextPayload(text)))
        return True
