"""Client error types for OBS WebSocket connections."""

from __future__ import annotations


class ObsClientError(Exception):
    """Base error for OBS WebSocket client failures."""


class ObsTimeout(ObsClientError):
    """A caller-supplied deadline expired while talking to the peer."""


class ObsConnectionError(ObsClientError):
    """Network connection to the peer could not be established."""


class ObsHandshakeError(ObsConnectionError):
    """WebSocket upgrade handshake failed."""


class ObsSendError(ObsClientError):
    """Writing a message to an open connection failed."""


class ObsReceiveError(ObsClientError):
    """Reading a message failed or the payload was malformed."""


class ObsCloseError(ObsClientError):
    """Releasing the connection failed."""


class ObsAuthError(ObsClientError):
    """Authentication handshake failed.

    Transport failures during the handshake are chained as ``__cause__``.
    """
