"""Protocol helpers for OBS WebSocket handshake messages.

Requests carry a ``message-id`` that the peer echoes back in its response.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Any

from .errors import ObsAuthError

GET_AUTH_REQUIRED = "GetAuthRequired"
AUTHENTICATE = "Authenticate"

STATUS_OK = "ok"
STATUS_ERROR = "error"


class MessageIdGenerator:
    """Monotonic correlation identifiers, one generator per session."""

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)

    def next_id(self) -> str:
        """Return the next identifier as a decimal string."""
        return str(next(self._counter))


@dataclass(frozen=True)
class AuthRequiredResponse:
    """Parsed ``GetAuthRequired`` response."""

    message_id: str
    status: str
    auth_required: bool
    error: str | None = None
    challenge: str | None = None
    salt: str | None = None


def build_get_auth_required(message_id: str) -> dict[str, Any]:
    """Construct a GetAuthRequired request."""
    return {
        "message-id": message_id,
        "request-type": GET_AUTH_REQUIRED,
    }


def build_authenticate(message_id: str, auth: str) -> dict[str, Any]:
    """Construct an Authenticate request carrying the derived credential."""
    return {
        "message-id": message_id,
        "request-type": AUTHENTICATE,
        "auth": auth,
    }


def _optional_str(message: dict[str, Any], key: str) -> str | None:
    value = message.get(key)
    if value is not None and not isinstance(value, str):
        raise ObsAuthError(f"{key} must be a string, got {type(value).__name__}")
    return value


def parse_auth_required(message: dict[str, Any]) -> AuthRequiredResponse:
    """Validate a GetAuthRequired response.

    Raises ObsAuthError if required fields are missing or mistyped. When
    ``authRequired`` is true both ``salt`` and ``challenge`` must be present.
    An error status is returned as-is; the caller decides how to react.
    """
    message_id = message.get("message-id")
    if not isinstance(message_id, str):
        raise ObsAuthError("message-id field is required in GetAuthRequired response")

    status = message.get("status")
    if not isinstance(status, str):
        raise ObsAuthError("status field is required in GetAuthRequired response")

    error = _optional_str(message, "error")
    if status == STATUS_ERROR:
        return AuthRequiredResponse(
            message_id=message_id,
            status=status,
            auth_required=False,
            error=error,
        )

    # bool is checked explicitly so 0/1 are rejected
    auth_required = message.get("authRequired")
    if not isinstance(auth_required, bool):
        raise ObsAuthError("authRequired field is required in GetAuthRequired response")

    challenge = _optional_str(message, "challenge")
    salt = _optional_str(message, "salt")
    if auth_required and (challenge is None or salt is None):
        raise ObsAuthError("salt and challenge are required when authRequired is true")

    return AuthRequiredResponse(
        message_id=message_id,
        status=status,
        auth_required=auth_required,
        error=error,
        challenge=challenge,
        salt=salt,
    )
