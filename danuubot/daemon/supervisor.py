"""
Connection supervisor for DanuuBot.

Keeps the client connected and feeds its events to the router:

    disconnected -> connecting -> connected -> disconnected ...
                                            -> stopped (logout / retries exhausted)

Reconnects use exponential backoff and a configurable attempt limit.
"""

import asyncio
from contextlib import aclosing
from enum import Enum
from typing import Any, Awaitable, Callable

from loguru import logger

from danuubot.bus.events import ConnectionUpdate
from danuubot.channels.base import BridgeError, MessagingClient
from danuubot.config.schema import ReconnectConfig
from danuubot.routing.router import EventRouter

# DisconnectReason.loggedOut
LOGGED_OUT_STATUS = 401

QrCallback = Callable[[str], Any]


class ConnectionState(str, Enum):
    """State of the messaging connection."""
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    STOPPED = "stopped"


class ConnectionSupervisor:
    """
    Owns the connect / listen / reconnect cycle.

    The router reports connection updates back through
    ``handle_connection_update``; message events flow through untouched.
    """

    def __init__(
        self,
        client: MessagingClient,
        router: EventRouter,
        config: ReconnectConfig | None = None,
        on_qr: QrCallback | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.client = client
        self.router = router
        self.config = config or ReconnectConfig()
        self.on_qr = on_qr
        self._sleep = sleep

        self.router.on_connection = self.handle_connection_update

        self.state = ConnectionState.DISCONNECTED
        self.attempts = 0
        self.last_status_code: int | None = None
        self._reconnect_requested = False

    def _set_state(self, state: ConnectionState) -> None:
        if state != self.state:
            logger.debug(f"Connection state: {self.state.value} -> {state.value}")
            self.state = state

    async def handle_connection_update(self, update: ConnectionUpdate) -> None:
        """React to a connection.update event."""
        if update.qr and self.on_qr is not None:
            logger.info("Pairing QR code received")
            result = self.on_qr(update.qr)
            if asyncio.iscoroutine(result):
                await result

        if update.connection == "open":
            self._set_state(ConnectionState.CONNECTED)
            self.attempts = 0
            logger.info("Connection is open! The DANUU-MD bot is now online.")

        elif update.connection == "close":
            self.last_status_code = update.status_code
            should_reconnect = update.status_code != LOGGED_OUT_STATUS
            logger.warning(
                f"Connection closed (status {update.status_code}). Reconnecting: {should_reconnect}"
            )
            if should_reconnect:
                self._set_state(ConnectionState.DISCONNECTED)
                self._reconnect_requested = True
            else:
                logger.error("Logged out, not reconnecting. Pair the device again to continue.")
                self._set_state(ConnectionState.STOPPED)

        elif update.connection == "connecting":
            self._set_state(ConnectionState.CONNECTING)

    def next_delay(self) -> float:
        """Backoff delay for the current attempt count."""
        exponent = max(self.attempts - 1, 0)
        return min(self.config.base_delay * (2 ** exponent), self.config.max_delay)

    async def _backoff(self) -> bool:
        """
        Wait before the next connection attempt.

        Returns:
            False when the attempt limit is reached.
        """
        self.attempts += 1
        if self.config.max_attempts and self.attempts > self.config.max_attempts:
            logger.error(f"Giving up after {self.config.max_attempts} reconnect attempts")
            self._set_state(ConnectionState.STOPPED)
            return False

        delay = self.next_delay()
        logger.info(f"Reconnecting in {delay:.1f}s (attempt {self.attempts})")
        await self._sleep(delay)
        return self.state != ConnectionState.STOPPED

    async def run(self) -> ConnectionState:
        """
        Connect and pump events until stopped.

        Returns:
            The final state (always STOPPED).
        """
        while self.state != ConnectionState.STOPPED:
            self._reconnect_requested = False
            self._set_state(ConnectionState.CONNECTING)

            try:
                await self.client.connect()
                async with aclosing(self.client.events()) as events:
                    async for event, data in events:
                        await self.router.route(event, data)
                        if self._reconnect_requested or self.state == ConnectionState.STOPPED:
                            break
                    else:
                        if self.state != ConnectionState.STOPPED:
                            logger.warning("Bridge event stream ended")
                            self._set_state(ConnectionState.DISCONNECTED)
            except BridgeError as e:
                logger.warning(f"Bridge connection error: {e}")
                if self.state != ConnectionState.STOPPED:
                    self._set_state(ConnectionState.DISCONNECTED)

            if self.state == ConnectionState.STOPPED:
                break
            if not await self._backoff():
                break

        await self.router.drain()
        return self.state

    async def stop(self) -> None:
        """Stop supervising and close the client."""
        logger.info("Stopping connection supervisor")
        self._set_state(ConnectionState.STOPPED)
        await self.router.drain()
        await self.client.close()

    def get_status(self) -> dict[str, Any]:
        return {
            "state": self.state.value,
            "attempts": self.attempts,
            "last_status_code": self.last_status_code,
        }
