"""Authentication of incoming relay connections."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from relay.application.context import RelayContext
from relay.domain.entities import Identity, RoomAddress
from relay.infrastructure.realtime import RelaySession

logger = logging.getLogger(__name__)

NO_TOKEN = "NO_TOKEN"
INVALID_TOKEN = "INVALID_TOKEN"
BEARER_PREFIX = "Bearer "


class AuthenticationError(Exception):
    """Raised when a connection cannot be tied to a valid identity."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


@dataclass
class Handshake:
    """Transport-neutral view of the data a client sends when connecting.

    ``headers`` keys are expected in lower case.
    """

    cookies: Mapping[str, str] = field(default_factory=dict)
    auth: Mapping[str, Any] = field(default_factory=dict)
    query: Mapping[str, str] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)


def extract_credential(handshake: Handshake, *, cookie_name: str) -> str | None:
    """Return the first credential found in cookie, auth field, query, then bearer header."""

    authorization = handshake.headers.get("authorization") or ""
    candidates = (
        handshake.cookies.get(cookie_name),
        handshake.auth.get("token"),
        handshake.query.get("token"),
        authorization[len(BEARER_PREFIX):] if authorization.startswith(BEARER_PREFIX) else None,
    )
    for candidate in candidates:
        if isinstance(candidate, str) and candidate.strip():
            return candidate.strip()
    return None


def authenticate_session(
    context: RelayContext, session: RelaySession, handshake: Handshake
) -> Identity:
    """Attach an identity to ``session`` and join its personal room.

    Raises :class:`AuthenticationError` without touching room membership when
    the credential is missing, rejected, or lacks a user id or role.
    """

    credential = extract_credential(handshake, cookie_name=context.settings.auth_cookie_name)
    if credential is None:
        raise AuthenticationError(NO_TOKEN)

    identity = context.identity_resolver.resolve(credential)
    if identity is None or not identity.user_id or not identity.role:
        raise AuthenticationError(INVALID_TOKEN)

    session.identity = identity
    context.rooms.join(session, RoomAddress.user(identity.user_id))
    logger.info("User %s authenticated on session %s", identity.user_id, session.id)
    return identity


async def reject_session(
    context: RelayContext,
    session: RelaySession,
    error: AuthenticationError,
    *,
    disconnect: Callable[[], Awaitable[None]],
) -> None:
    """Tell the client why it was refused, then drop it after a short grace delay."""

    logger.warning("Authentication failed for session %s: %s", session.id, error.reason)
    session.identity = None
    context.rooms.leave_all(session)
    try:
        await session.send(
            "auth_error", {"message": "Authentication failed", "details": error.reason}
        )
    except Exception as exc:  # pragma: no cover - network stack
        logger.debug("Could not deliver auth_error to session %s: %s", session.id, exc)
    await asyncio.sleep(context.settings.auth_error_grace_seconds)
    await disconnect()


__all__ = [
    "AuthenticationError",
    "Handshake",
    "INVALID_TOKEN",
    "NO_TOKEN",
    "authenticate_session",
    "extract_credential",
    "reject_session",
]
