"""Session manager combining the WebSocket connection and the auth handshake.

This module provides the entry point for applications that need an
authenticated OBS WebSocket connection. It handles:
- Opening the connection
- Running the authentication handshake
- Closing the connection on failure or on request
- Connection state notification

Request dispatch after authentication is left to the caller, who uses
``session.client`` directly.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from types import TracebackType

from .errors import ObsAuthError, ObsClientError, ObsCloseError, ObsConnectionError
from .handshake import HandshakeResult, authenticate
from .protocol import MessageIdGenerator
from .transport.ws_client import ObsWsClient

_LOGGER = logging.getLogger(__name__)


class ObsSession:
    """Authenticated connection to one OBS WebSocket peer.

    Usage:
        session = ObsSession("localhost", 4444, password="secret")
        await session.connect()
        await session.client.send_json(...)
        await session.close()

    or:
        async with ObsSession("localhost", 4444, password="secret") as session:
            ...
    """

    def __init__(
        self,
        host: str,
        port: int,
        password: str = "",
        *,
        ping_interval: float | None = 20,
        timeout: float | None = None,
    ) -> None:
        """Initialize session.

        Args:
            host: Peer hostname or IP
            port: Peer port
            password: Shared secret, empty when the peer has none
            ping_interval: Keepalive ping interval (seconds), None disables
            timeout: Deadline for connecting and for the handshake response
                (seconds), None waits indefinitely
        """
        self.host = host
        self.port = port
        self.password = password

        self._ping_interval = ping_interval
        self._timeout = timeout

        self._ws: ObsWsClient | None = None
        self._message_ids = MessageIdGenerator()
        self._connection_state = "disconnected"
        self._connection_state_callback: Callable[[str], None] | None = None

    # -------------------------------------------------------------------------
    # Public API: Connection Management
    # -------------------------------------------------------------------------

    async def connect(self) -> HandshakeResult:
        """Connect and authenticate to the peer.

        Raises:
            ObsConnectionError: If the connection could not be established
            ObsTimeout: If connecting exceeded the configured timeout
            ObsAuthError: If the handshake failed
        """
        if self._ws is not None:
            raise ObsConnectionError("Session is already connected")

        self._set_state("connecting")
        _LOGGER.info("[%s:%s] Connecting to ws://%s:%s", *self._tag, self.host, self.port)

        ws_client = ObsWsClient()
        try:
            await ws_client.connect(
                self.host,
                self.port,
                ping_interval=self._ping_interval,
                timeout=self._timeout,
            )
        except ObsClientError as err:
            _LOGGER.warning("[%s:%s] Connection failed: %s", *self._tag, err)
            self._set_state("failed")
            raise
        except asyncio.CancelledError:
            _LOGGER.warning("[%s:%s] Connection cancelled", *self._tag)
            self._set_state("failed")
            raise

        self._ws = ws_client
        self._set_state("authenticating")
        try:
            result = await authenticate(
                ws_client,
                self.password,
                message_ids=self._message_ids,
                timeout=self._timeout,
            )
        except ObsAuthError as err:
            _LOGGER.error("[%s:%s] Authentication failed: %s", *self._tag, err)
            await self._release()
            self._set_state("failed")
            raise
        except asyncio.CancelledError:
            # __aexit__ does not run when __aenter__ raises
            _LOGGER.warning("[%s:%s] Authentication cancelled", *self._tag)
            await self._release()
            self._set_state("failed")
            raise

        self._set_state("authenticated")
        return result

    async def close(self) -> None:
        """Close the session. Safe to call more than once."""
        if self._ws is not None:
            _LOGGER.info("[%s:%s] Closing session", *self._tag)
        await self._release()
        self._set_state("disconnected")

    async def __aenter__(self) -> ObsSession:
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    @property
    def client(self) -> ObsWsClient:
        """Get the authenticated client for further requests."""
        if self._ws is None or not self.is_authenticated:
            raise ObsConnectionError("Session is not authenticated")
        return self._ws

    @property
    def is_authenticated(self) -> bool:
        """Check if the handshake completed on an open connection.

        The peer does not confirm credentials, so this does not prove the
        password was accepted.
        """
        return self._connection_state == "authenticated"

    @property
    def connection_state(self) -> str:
        """Get current connection state."""
        return self._connection_state

    # -------------------------------------------------------------------------
    # Public API: Callbacks
    # -------------------------------------------------------------------------

    def on_connection_state_changed(self, callback: Callable[[str], None]) -> None:
        """Register callback for connection state changes.

        Callback receives state: "connecting", "authenticating", "authenticated", "failed", "disconnected"
        """
        self._connection_state_callback = callback

    # -------------------------------------------------------------------------
    # Internal
    # -------------------------------------------------------------------------

    @property
    def _tag(self) -> tuple[str, int]:
        return self.host, self.port

    def _set_state(self, state: str) -> None:
        """Update connection state and notify callback."""
        if self._connection_state != state:
            _LOGGER.debug(
                "[%s:%s] State: %s → %s", *self._tag, self._connection_state, state
            )
            self._connection_state = state
            if self._connection_state_callback:
                self._connection_state_callback(state)

    async def _release(self) -> None:
        ws, self._ws = self._ws, None
        if ws is None:
            return
        try:
            await ws.close()
        except ObsCloseError as err:
            _LOGGER.warning("[%s:%s] WebSocket close failed: %s", *self._tag, err)
