"""
WhatsApp client backed by the Baileys Node bridge.

The bridge owns the protocol session and exposes it over HTTP:
- SSE stream of socket events (connection.update, messages.upsert, ...)
- JSON endpoints for send, read receipts, media download, profile pictures
"""

import json
from typing import Any, AsyncIterator

import httpx
from loguru import logger

from danuubot.bus.events import MessageKey, OutboundMessage
from danuubot.channels.base import BridgeError, MessagingClient
from danuubot.config.schema import BridgeConfig


class BridgeClient(MessagingClient):
    """
    MessagingClient implementation talking to the bridge over httpx.

    Configuration (via BridgeConfig):
    - url: Base URL of the bridge (e.g., http://localhost:3001)
    - auth_dir: Directory where the bridge keeps session credentials
    - browser: Browser triple announced to WhatsApp
    - timeout: Per-request timeout in seconds
    """

    name = "whatsapp"

    def __init__(self, config: BridgeConfig, client: httpx.AsyncClient | None = None):
        self.config = config
        self.base_url = config.url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=config.timeout)

    async def _post(self, path: str, payload: dict[str, Any]) -> httpx.Response:
        try:
            response = await self._client.post(f"{self.base_url}{path}", json=payload)
            response.raise_for_status()
            return response
        except httpx.HTTPError as e:
            raise BridgeError(f"Bridge call {path} failed: {e}") from e

    async def connect(self) -> None:
        """Ask the bridge to open a socket with the stored credentials."""
        logger.info(f"Connecting to WhatsApp bridge at {self.base_url}")
        await self._post("/connect", {
            "authDir": self.config.auth_dir,
            "browser": self.config.browser,
        })

    async def close(self) -> None:
        """Close the bridge socket and the HTTP session."""
        try:
            await self._post("/close", {})
        except BridgeError as e:
            logger.debug(f"Bridge close failed: {e}")
        await self._client.aclose()

    async def events(self) -> AsyncIterator[tuple[str, dict[str, Any]]]:
        """Stream socket events until the SSE connection drops."""
        try:
            async with self._client.stream(
                "GET",
                f"{self.base_url}/events",
                timeout=None,
            ) as response:
                response.raise_for_status()
                async for line in response.aiter_lines():
                    if not line or not line.startswith("data:"):
                        continue

                    try:
                        frame = json.loads(line[5:].strip())
                    except json.JSONDecodeError:
                        logger.debug(f"Skipping malformed bridge frame: {line[:100]}")
                        continue

                    if not isinstance(frame, dict) or "event" not in frame:
                        continue
                    data = frame.get("data")
                    yield str(frame["event"]), data if isinstance(data, dict) else {}
        except httpx.HTTPError as e:
            raise BridgeError(f"Bridge event stream failed: {e}") from e

    async def send_message(self, message: OutboundMessage) -> dict[str, Any]:
        response = await self._post("/send", {
            "jid": message.chat_id,
            "content": message.to_content(),
        })
        try:
            return response.json()
        except ValueError:
            return {}

    async def read_messages(self, keys: list[MessageKey]) -> None:
        await self._post("/read", {"keys": [k.to_dict() for k in keys]})

    async def download_media_message(self, message: dict[str, Any]) -> bytes:
        response = await self._post("/download", {"message": message})
        return response.content

    async def profile_picture_url(self, jid: str, kind: str = "image") -> str | None:
        try:
            response = await self._client.get(
                f"{self.base_url}/profile-picture",
                params={"jid": jid, "type": kind},
            )
        except httpx.HTTPError as e:
            raise BridgeError(f"Profile picture lookup failed: {e}") from e

        if response.status_code == 404:
            return None
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise BridgeError(f"Profile picture lookup failed: {e}") from e

        try:
            data = response.json()
        except ValueError:
            return None
        url = data.get("url") if isinstance(data, dict) else None
        return url or None
