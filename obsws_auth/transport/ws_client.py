"""WebSocket client wrapper for OBS WebSocket."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from websockets.asyncio.client import ClientConnection
from websockets.exceptions import ConnectionClosed, WebSocketException

from ..errors import ObsCloseError, ObsReceiveError, ObsSendError, ObsTimeout
from .ws import connect_websocket

_LOGGER = logging.getLogger(__name__)


class ObsWsClient:
    """Single-owner JSON message session over one WebSocket connection."""

    def __init__(self) -> None:
        self._ws: ClientConnection | None = None

    @property
    def is_open(self) -> bool:
        """Return True while the connection is held."""
        return self._ws is not None

    async def connect(
        self,
        host: str,
        port: int,
        *,
        ping_interval: float | None = 20,
        timeout: float | None = None,
    ) -> None:
        """Connect to the peer websocket."""
        self._ws = await connect_websocket(
            host,
            port,
            ping_interval=ping_interval,
            timeout=timeout,
        )

    async def close(self) -> None:
        """Close the websocket connection.

        Safe to call more than once; later calls do nothing.
        """
        ws, self._ws = self._ws, None
        if ws is None:
            return
        try:
            await ws.close()
        except (OSError, WebSocketException) as err:
            raise ObsCloseError("WebSocket close failed") from err

    async def send_json(self, payload: dict[str, Any]) -> None:
        """Send a JSON payload as a single text frame."""
        if self._ws is None:
            raise ObsSendError("WebSocket is not connected")
        try:
            text = json.dumps(payload)
        except (TypeError, ValueError) as err:
            raise ObsSendError("Payload is not JSON serializable") from err
        try:
            await self._ws.send(text)
        except ConnectionClosed as err:
            raise ObsSendError("WebSocket closed while sending") from err
        except (OSError, WebSocketException) as err:
            raise ObsSendError("WebSocket send failed") from err

    async def receive_json(self, *, timeout: float | None = None) -> dict[str, Any]:
        """Wait for the next message and decode it as a JSON object.

        Args:
            timeout: Deadline in seconds, None waits until a message arrives
                or the connection fails

        Raises:
            ObsReceiveError: If not connected, the connection is lost, or the
                payload is not a JSON object
            ObsTimeout: If the deadline expires
        """
        if self._ws is None:
            raise ObsReceiveError("WebSocket is not connected")
        try:
            raw = await asyncio.wait_for(self._ws.recv(), timeout=timeout)
        except TimeoutError as err:
            raise ObsTimeout("Timed out waiting for a message") from err
        except ConnectionClosed as err:
            raise ObsReceiveError("WebSocket closed while receiving") from err
        except (OSError, WebSocketException) as err:
            raise ObsReceiveError("WebSocket receive failed") from err
        return self.decode_json(raw)

    @staticmethod
    def decode_json(raw: str | bytes) -> dict[str, Any]:
        """Decode a frame payload into a JSON object."""
        if isinstance(raw, bytes):
            try:
                raw = raw.decode("utf-8")
            except UnicodeDecodeError as err:
                raise ObsReceiveError("Message payload is not UTF-8 text") from err
        try:
            result = json.loads(raw)
        except json.JSONDecodeError as err:
            raise ObsReceiveError("Message payload is not valid JSON") from err
        if not isinstance(result, dict):
            raise ObsReceiveError(
                f"Expected a JSON object, got {type(result).__name__}"
            )
        _LOGGER.debug("Received message %s", result.get("message-id"))
        return result
