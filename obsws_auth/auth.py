"""Credential derivation for the OBS WebSocket challenge-response scheme."""

from __future__ import annotations

import base64
import hashlib


def _b64_sha256(text: str) -> str:
    digest = hashlib.sha256(text.encode("utf-8")).digest()
    return base64.b64encode(digest).decode("ascii")


def derive_auth(secret: str, salt: str, challenge: str) -> str:
    """Derive the ``auth`` value submitted with an Authenticate request.

    ``base64(sha256(secret + salt))`` is computed first and its base64 text,
    not the raw digest, is then hashed together with the challenge::

        credential = base64(sha256(base64(sha256(secret + salt)) + challenge))

    Inputs are concatenated as text and encoded as UTF-8. An empty secret is
    valid input.
    """
    secret_hash = _b64_sha256(secret + salt)
    return _b64_sha256(secret_hash + challenge)
