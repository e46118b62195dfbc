from __future__ import annotations

import uuid
from dataclasses import dataclass

from flask import g, has_request_context, session


@dataclass(frozen=True)
class AuthSession:
    """What the auth provider tells us about the caller: at most a user id."""

    user_id: str


def assign_request_id() -> None:
    """Per-request id for audit/log correlation."""
    if not getattr(g, "request_id", None):
        g.request_id = uuid.uuid4().hex


def auth() -> AuthSession | None:
    """
    Read the caller's session from the signed session cookie.

    Sign-in itself is handled by the external auth provider, which stores
    `user_id` in the Flask session. Returns None for anonymous callers.
    """
    if not has_request_context():
        return None
    user_id = session.get("user_id")
    if not user_id:
        return None
    return AuthSession(user_id=str(user_id))
