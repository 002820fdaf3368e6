"""
Command detection and matching for DanuuBot.

Supports:
- Exact and prefix triggers (".ping", ".echo <text>")
- Multiple triggers per command (".help" / ".menu")
- Extra match predicates (".sticker" needs an attached image)
- Ordered rule table, first match wins
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Awaitable, Callable

from danuubot.bus.events import InboundMessage, OutboundMessage, TextPayload, Payload

if TYPE_CHECKING:
    from danuubot.auto_reply.flags import FeatureFlags
    from danuubot.channels.base import MessagingClient


class MatchKind(str, Enum):
    """How a trigger is compared with the lowercased message text."""
    EXACT = "exact"
    PREFIX = "prefix"


@dataclass
class Command:
    """A matched command."""
    name: str
    trigger: str
    args_str: str = ""  # Text after the trigger, original case, stripped


@dataclass
class CommandContext:
    """Everything an action needs to answer a message."""
    message: InboundMessage
    client: "MessagingClient"
    flags: "FeatureFlags"

    async def reply(self, payload: Payload) -> dict[str, Any]:
        """Send a payload back to the originating chat."""
        return await self.client.send_message(OutboundMessage(self.message.chat_id, payload))

    async def reply_text(self, text: str) -> dict[str, Any]:
        return await self.reply(TextPayload(text))


# Type alias for command handlers
CommandHandler = Callable[[Command, CommandContext], Awaitable[None]]
MatchPredicate = Callable[[InboundMessage], bool]


@dataclass
class CommandRule:
    """One row of the command table."""
    name: str
    handler: CommandHandler
    triggers: list[str]
    kind: MatchKind = MatchKind.EXACT
    requires: MatchPredicate | None = None
    help_text: str = ""

    def match(self, message: InboundMessage, text_lower: str) -> Command | None:
        """Return the parsed command if this rule accepts the message."""
        for trigger in self.triggers:
            if self.kind == MatchKind.EXACT:
                hit = text_lower == trigger
            else:
                hit = text_lower.startswith(trigger)
            if not hit:
                continue
            if self.requires is not None and not self.requires(message):
                continue
            return Command(
                name=self.name,
                trigger=trigger,
                args_str=message.text[len(trigger):].strip(),
            )
        return None


class CommandRegistry:
    """
    Ordered registry of command rules.

    Rules are tested in registration order and the first one that matches
    wins, so one message runs at most one action.
    """

    def __init__(self):
        self._rules: list[CommandRule] = []

    def register(
        self,
        name: str,
        handler: CommandHandler,
        triggers: list[str] | None = None,
        kind: MatchKind = MatchKind.EXACT,
        requires: MatchPredicate | None = None,
        help_text: str = "",
    ) -> CommandRule:
        """
        Register a command handler.

        Args:
            name: Command name, also the default trigger.
            handler: Async function to handle the command.
            triggers: Lowercase texts that select this command.
            kind: Exact or prefix comparison.
            requires: Extra predicate the message must satisfy.
            help_text: Help text for the command.

        Returns:
            The registered rule.
        """
        if self.get_rule(name) is not None:
            raise ValueError(f"Command already registered: {name}")

        rule = CommandRule(
            name=name,
            handler=handler,
            triggers=[t.lower() for t in (triggers or [name])],
            kind=kind,
            requires=requires,
            help_text=help_text,
        )
        self._rules.append(rule)
        return rule

    def get_rule(self, name: str) -> CommandRule | None:
        for rule in self._rules:
            if rule.name == name:
                return rule
        return None

    def match(self, message: InboundMessage) -> tuple[CommandRule, Command] | None:
        """Find the first rule matching the message."""
        text_lower = message.text.lower()
        for rule in self._rules:
            command = rule.match(message, text_lower)
            if command is not None:
                return rule, command
        return None

    @property
    def rules(self) -> list[CommandRule]:
        return list(self._rules)
