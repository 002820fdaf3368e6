"""
Auto-reply system for DanuuBot.

Provides chat-side behavior:
- Command table and dispatch
- Feature flags toggled from chat
- Automations (status view, auto-react, anti-delete)
"""

from danuubot.auto_reply.commands import (
    Command,
    CommandContext,
    CommandRegistry,
    CommandRule,
    MatchKind,
)
from danuubot.auto_reply.flags import FeatureFlags
from danuubot.auto_reply.cache import MessageCache
from danuubot.auto_reply.dispatch import CommandDispatcher, build_default_registry
from danuubot.auto_reply.automation import AutomationHandlers

__all__ = [
    # Commands
    "Command",
    "CommandContext",
    "CommandRegistry",
    "CommandRule",
    "MatchKind",
    "build_default_registry",
    # State
    "FeatureFlags",
    "MessageCache",
    # Dispatch
    "CommandDispatcher",
    "AutomationHandlers",
]
