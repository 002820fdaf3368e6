"""
Event router for DanuuBot.

Classifies raw client events and fans them out:
- connection.update -> connection callback (the supervisor)
- messages.upsert from status@broadcast -> status automation
- other messages.upsert -> anti-delete, auto-react, command dispatch

Every message event is handled in its own task. Handlers do not wait for
each other and nothing is ordered between events.
"""

import asyncio
from typing import Any, Awaitable, Callable, Coroutine

from loguru import logger

from danuubot.auto_reply.automation import AutomationHandlers
from danuubot.auto_reply.dispatch import CommandDispatcher
from danuubot.bus.events import ConnectionUpdate, InboundMessage, MessagesUpsert
from danuubot.channels.parsing import parse_connection_update, parse_message, parse_messages_upsert

ConnectionCallback = Callable[[ConnectionUpdate], Awaitable[None]]


class EventRouter:
    """Routes client events to automations and the command dispatcher."""

    def __init__(
        self,
        dispatcher: CommandDispatcher,
        automation: AutomationHandlers,
        on_connection: ConnectionCallback | None = None,
    ):
        self.dispatcher = dispatcher
        self.automation = automation
        self.on_connection = on_connection

        self._tasks: set[asyncio.Task] = set()

        # Stats
        self._events_routed = 0
        self._handler_errors = 0

    async def route(self, event: str, data: dict[str, Any]) -> None:
        """
        Classify one raw event and hand it off.

        Args:
            event: Bridge event name.
            data: Event payload.
        """
        self._events_routed += 1

        if event == "connection.update":
            update = parse_connection_update(data)
            if self.on_connection is not None:
                await self.on_connection(update)
            return

        if event == "messages.upsert":
            upsert = parse_messages_upsert(data)
            if upsert.messages:
                self.submit(self.handle_upsert(upsert))
            return

        logger.debug(f"Ignoring bridge event: {event}")

    def submit(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task:
        """Run a handler as an independent task."""
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self) -> None:
        """Wait for all in-flight handlers to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def handle_upsert(self, upsert: MessagesUpsert) -> None:
        """Handle the first message of an upsert batch."""
        message = parse_message(upsert.messages[0], upsert_type=upsert.type)

        if message.from_me:
            return

        if message.is_status:
            await self._safely("status view", self.automation.handle_status(message))
            return

        if message.upsert_type != "notify" or not message.has_payload:
            return

        await self.handle_message(message)

    async def handle_message(self, message: InboundMessage) -> None:
        """Run automations, then the command dispatcher, for a chat message."""
        logger.info(f"Received a message from {message.chat_id}: {message.text}")

        self.automation.remember(message)
        await self._safely("anti-delete", self.automation.handle_anti_delete(message))
        await self._safely("auto-react", self.automation.handle_auto_react(message))
        await self._safely("dispatch", self.dispatcher.dispatch(message))

    async def _safely(self, stage: str, coro: Awaitable[Any]) -> None:
        try:
            await coro
        except Exception as e:
            self._handler_errors += 1
            logger.error(f"Error in {stage} handler: {e}")

    def get_stats(self) -> dict[str, Any]:
        """Get router statistics."""
        return {
            "events_routed": self._events_routed,
            "handler_errors": self._handler_errors,
            "pending_tasks": self.pending,
            "dispatcher": self.dispatcher.get_stats(),
            "cache": self.automation.cache.get_stats(),
        }
