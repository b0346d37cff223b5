"""Authentication handshake driven over an open ObsWsClient.

The exchange is strictly sequential:

    START --GetAuthRequired--> AWAITING_AUTH_REQUIRED
    AWAITING_AUTH_REQUIRED --authRequired=false--> AUTHENTICATED
    AWAITING_AUTH_REQUIRED --authRequired=true, Authenticate--> AUTHENTICATED
    any failure --> FAILED

The protocol defines no reply to ``Authenticate``. AUTHENTICATED therefore
means the credential was delivered, not that the peer accepted it; a wrong
password only shows up later when the peer rejects requests or disconnects.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from .auth import derive_auth
from .errors import ObsAuthError, ObsClientError
from .protocol import (
    STATUS_ERROR,
    AuthRequiredResponse,
    MessageIdGenerator,
    build_authenticate,
    build_get_auth_required,
    parse_auth_required,
)
from .transport.ws_client import ObsWsClient

_LOGGER = logging.getLogger(__name__)


class HandshakeState(Enum):
    """Handshake progress."""

    START = "start"
    AWAITING_AUTH_REQUIRED = "awaiting_auth_required"
    AUTHENTICATED = "authenticated"
    FAILED = "failed"


_TRANSITIONS: dict[HandshakeState, frozenset[HandshakeState]] = {
    HandshakeState.START: frozenset(
        {HandshakeState.AWAITING_AUTH_REQUIRED, HandshakeState.FAILED}
    ),
    HandshakeState.AWAITING_AUTH_REQUIRED: frozenset(
        {HandshakeState.AUTHENTICATED, HandshakeState.FAILED}
    ),
    HandshakeState.AUTHENTICATED: frozenset(),
    HandshakeState.FAILED: frozenset(),
}


@dataclass(frozen=True)
class HandshakeResult:
    """Outcome of a completed handshake.

    The peer never confirms the credential, so there is no "accepted" flag.
    """

    auth_required: bool
    credential_sent: bool


class Handshake:
    """Single-use handshake over one client.

    Usage:
        handshake = Handshake(client)
        result = await handshake.run(password)
    """

    def __init__(
        self,
        client: ObsWsClient,
        *,
        message_ids: MessageIdGenerator | None = None,
    ) -> None:
        self._client = client
        self._message_ids = message_ids or MessageIdGenerator()
        self._state = HandshakeState.START

    @property
    def state(self) -> HandshakeState:
        """Get current handshake state."""
        return self._state

    def _transition(self, state: HandshakeState) -> None:
        if state not in _TRANSITIONS[self._state]:
            raise ObsAuthError(
                f"Invalid handshake transition {self._state.value} -> {state.value}"
            )
        _LOGGER.debug("Handshake: %s → %s", self._state.value, state.value)
        self._state = state

    async def run(self, secret: str, *, timeout: float | None = None) -> HandshakeResult:
        """Run the exchange and return its result.

        Args:
            secret: Shared password, may be empty
            timeout: Deadline for the GetAuthRequired response, None waits
                indefinitely

        Raises:
            ObsAuthError: On any transport failure (chained as the cause), a
                malformed or mismatched response, or when reused
        """
        if self._state is not HandshakeState.START:
            raise ObsAuthError(f"Handshake already ran (state: {self._state.value})")
        if not self._client.is_open:
            self._state = HandshakeState.FAILED
            raise ObsAuthError("Cannot authenticate: WebSocket is not connected")

        try:
            response = await self._query_auth_required(timeout)
            if not response.auth_required:
                _LOGGER.info("No authentication required")
                self._transition(HandshakeState.AUTHENTICATED)
                return HandshakeResult(auth_required=False, credential_sent=False)

            await self._submit_credential(secret, response)
        except ObsAuthError:
            self._state = HandshakeState.FAILED
            raise
        except ObsClientError as err:
            self._state = HandshakeState.FAILED
            raise ObsAuthError(f"Handshake failed: {err}") from err

        self._transition(HandshakeState.AUTHENTICATED)
        _LOGGER.info("Authenticated")
        return HandshakeResult(auth_required=True, credential_sent=True)

    async def _query_auth_required(
        self, timeout: float | None
    ) -> AuthRequiredResponse:
        message_id = self._message_ids.next_id()
        await self._client.send_json(build_get_auth_required(message_id))
        self._transition(HandshakeState.AWAITING_AUTH_REQUIRED)

        response = parse_auth_required(await self._client.receive_json(timeout=timeout))
        if response.message_id != message_id:
            raise ObsAuthError(
                f"Unexpected response id {response.message_id!r}, expected {message_id!r}"
            )
        if response.status == STATUS_ERROR:
            raise ObsAuthError(
                f"GetAuthRequired failed: {response.error or 'unknown error'}"
            )
        return response

    async def _submit_credential(
        self, secret: str, response: AuthRequiredResponse
    ) -> None:
        salt, challenge = response.salt, response.challenge
        if salt is None or challenge is None:
            raise ObsAuthError("salt and challenge are required when authRequired is true")
        auth = derive_auth(secret, salt, challenge)
        message_id = self._message_ids.next_id()
        _LOGGER.debug("Sending Authenticate (message-id %s)", message_id)
        await self._client.send_json(build_authenticate(message_id, auth))


async def authenticate(
    client: ObsWsClient,
    secret: str,
    *,
    message_ids: MessageIdGenerator | None = None,
    timeout: float | None = None,
) -> HandshakeResult:
    """Authenticate an open client, sending a credential only if required."""
    return await Handshake(client, message_ids=message_ids).run(
        secret, timeout=timeout
    )
