"""
Command dispatcher for DanuuBot.

Matches an inbound message against the command table and runs the one
matching action. Errors never escape to the caller:
- Actions report their own expected failures in chat
- Anything unexpected is logged and answered with a generic notice
"""

from typing import Any

from loguru import logger

from danuubot.auto_reply import content
from danuubot.auto_reply.commands import CommandContext, CommandRegistry
from danuubot.auto_reply.flags import FeatureFlags
from danuubot.auto_reply.handlers import register_default_handlers
from danuubot.bus.events import InboundMessage
from danuubot.channels.base import MessagingClient


def build_default_registry(prefix: str = ".") -> CommandRegistry:
    """Create a registry holding the built-in command table."""
    registry = CommandRegistry()
    register_default_handlers(registry, prefix)
    return registry


class CommandDispatcher:
    """
    Dispatches user commands to their actions.

    Flow:
    1. Lowercase the text and find the first matching rule
    2. Run its action with a CommandContext
    3. Convert unexpected errors into a chat notice
    """

    def __init__(
        self,
        client: MessagingClient,
        flags: FeatureFlags,
        registry: CommandRegistry | None = None,
        prefix: str = ".",
    ):
        self.client = client
        self.flags = flags
        self.registry = registry if registry is not None else build_default_registry(prefix)

        # Stats
        self._dispatched_count = 0
        self._error_count = 0

    async def dispatch(self, message: InboundMessage) -> str | None:
        """
        Run the command carried by a message, if any.

        Args:
            message: The normalized inbound message.

        Returns:
            Name of the command that ran, or None if nothing matched.
        """
        matched = self.registry.match(message)
        if matched is None:
            return None

        rule, command = matched
        logger.debug(f"Command {rule.name} from {message.chat_id}")
        self._dispatched_count += 1

        ctx = CommandContext(message=message, client=self.client, flags=self.flags)
        try:
            await rule.handler(command, ctx)
        except Exception as e:
            self._error_count += 1
            logger.error(f"Command {rule.name} failed: {e}")
            try:
                await ctx.reply_text(content.GENERIC_FAILED)
            except Exception as send_error:
                logger.error(f"Failed to report command error: {send_error}")

        return rule.name

    def get_stats(self) -> dict[str, Any]:
        """Get dispatcher statistics."""
        return {
            "dispatched_count": self._dispatched_count,
            "error_count": self._error_count,
            "commands": len(self.registry.rules),
        }
