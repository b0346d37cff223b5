"""Transport layer for OBS WebSocket clients.

Components:
- ws: WebSocket connection management
- ws_client: JSON message send/receive over one connection
"""

from .ws import build_ws_url, connect_websocket
from .ws_client import ObsWsClient

__all__ = [
    "ObsWsClient",
    "build_ws_url",
    "connect_websocket",
]
