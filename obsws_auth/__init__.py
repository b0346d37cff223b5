"""Authenticated connections to OBS WebSocket (protocol v4) peers."""

__version__ = "0.1.0"

from .auth import derive_auth
from .errors import (
    ObsAuthError,
    ObsClientError,
    ObsCloseError,
    ObsConnectionError,
    ObsHandshakeError,
    ObsReceiveError,
    ObsSendError,
    ObsTimeout,
)
from .handshake import Handshake, HandshakeResult, HandshakeState, authenticate
from .protocol import (
    AuthRequiredResponse,
    MessageIdGenerator,
    build_authenticate,
    build_get_auth_required,
    parse_auth_required,
)
from .session import ObsSession
from .transport import ObsWsClient, connect_websocket

__all__ = [
    "AuthRequiredResponse",
    "Handshake",
    "HandshakeResult",
    "HandshakeState",
    "MessageIdGenerator",
    "ObsAuthError",
    "ObsClientError",
    "ObsCloseError",
    "ObsConnectionError",
    "ObsHandshakeError",
    "ObsReceiveError",
    "ObsSendError",
    "ObsSession",
    "ObsTimeout",
    "ObsWsClient",
    "__version__",
    "authenticate",
    "build_authenticate",
    "build_get_auth_required",
    "connect_websocket",
    "derive_auth",
    "parse_auth_required",
]
