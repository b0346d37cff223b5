"""Pytest configuration and fixtures for obsws_auth tests."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock

import pytest

from obsws_auth.errors import ObsReceiveError, ObsSendError


class FakeObsWsClient:
    """Capturing stand-in for ObsWsClient.

    Records every payload passed to send_json and replays scripted
    responses from receive_json. A scripted Exception is raised instead of
    returned.
    """

    def __init__(
        self,
        responses: list[dict[str, Any] | Exception] | None = None,
        *,
        opened: bool = True,
        send_error: Exception | None = None,
    ) -> None:
        self.sent: list[dict[str, Any]] = []
        self.receive_timeouts: list[float | None] = []
        self.connect_calls: list[tuple[str, int, dict[str, Any]]] = []
        self.close_calls = 0
        self.is_open = opened
        self.send_error = send_error
        self._responses = list(responses or [])

    async def connect(self, host: str, port: int, **kwargs: Any) -> None:
        self.connect_calls.append((host, port, kwargs))
        self.is_open = True

    async def send_json(self, payload: dict[str, Any]) -> None:
        if not self.is_open:
            raise ObsSendError("WebSocket is not connected")
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(payload)

    async def receive_json(self, *, timeout: float | None = None) -> dict[str, Any]:
        self.receive_timeouts.append(timeout)
        if not self._responses:
            raise ObsReceiveError("WebSocket closed while receiving")
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def close(self) -> None:
        self.close_calls += 1
        self.is_open = False

    def requests_of_type(self, request_type: str) -> list[dict[str, Any]]:
        return [p for p in self.sent if p.get("request-type") == request_type]


def auth_required_response(
    message_id: str = "1",
    *,
    salt: str | None = None,
    challenge: str | None = None,
    status: str = "ok",
    auth_required: bool | None = None,
) -> dict[str, Any]:
    """Build a GetAuthRequired response payload.

    authRequired defaults to True when salt/challenge are given.
    """
    if auth_required is None:
        auth_required = salt is not None or challenge is not None
    response: dict[str, Any] = {
        "message-id": message_id,
        "status": status,
        "authRequired": auth_required,
    }
    if salt is not None:
        response["salt"] = salt
    if challenge is not None:
        response["challenge"] = challenge
    return response


@pytest.fixture
def fake_client() -> FakeObsWsClient:
    """Open fake client for a peer that requires no authentication."""
    return FakeObsWsClient([auth_required_response()])


@pytest.fixture
def mock_ws() -> AsyncMock:
    """Create a mock websockets ClientConnection."""
    ws = AsyncMock()
    ws.send = AsyncMock()
    ws.recv = AsyncMock()
    ws.close = AsyncMock()
    return ws
