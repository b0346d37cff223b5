"""WebSocket helpers for OBS WebSocket transport."""

from __future__ import annotations

import websockets
from websockets.asyncio.client import ClientConnection
from websockets.exceptions import (
    InvalidHandshake,
    InvalidURI,
    WebSocketException,
)

from ..errors import (
    ObsConnectionError,
    ObsHandshakeError,
    ObsTimeout,
)

# Handshake replies are small; larger frames close the connection.
MAX_MESSAGE_SIZE = 2**20


def build_ws_url(host: str, port: int) -> str:
    """Return the connection URI for ``host:port``."""
    return f"ws://{host}:{port}"


async def connect_websocket(
    host: str,
    port: int,
    *,
    ping_interval: float | None = 20,
    timeout: float | None = None,
) -> ClientConnection:
    """Open a WebSocket connection to an OBS WebSocket peer.

    Args:
        host: Target host
        port: Target port
        ping_interval: Interval for ping frames, None disables keepalive
        timeout: Deadline for the TCP connect and upgrade in seconds, None
            waits indefinitely
    """
    ws_url = build_ws_url(host, port)
    try:
        return await websockets.connect(
            ws_url,
            open_timeout=timeout,
            ping_interval=ping_interval,
            max_size=MAX_MESSAGE_SIZE,
        )
    except TimeoutError as err:
        raise ObsTimeout(f"Opening {ws_url} timed out") from err
    except (InvalidHandshake, InvalidURI) as err:
        raise ObsHandshakeError(f"WebSocket upgrade with {ws_url} rejected") from err
    except (OSError, WebSocketException) as err:
        raise ObsConnectionError(f"Cannot reach {ws_url}") from err
