"""Credential helpers: JWT issuing and verification."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any

from jose import JWTError, jwt

from relay.config import Settings, get_settings
from relay.domain.entities import Identity
from relay.utils import utc_now

logger = logging.getLogger(__name__)


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
    *,
    settings: Settings | None = None,
) -> str:
    settings = settings or get_settings()
    expire = utc_now() + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode(
        {**data, "exp": expire}, settings.secret_key, algorithm=settings.jwt_algorithm
    )


def decode_access_token(token: str, *, settings: Settings | None = None) -> dict[str, Any]:
    settings = settings or get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


class TokenIdentityResolver:
    """Map a signed JWT to an :class:`Identity`.

    The claims follow the web application's token layout: ``userId``,
    ``role``, ``email`` and ``fullName``. Missing claims come back as empty
    strings so the caller decides whether the identity is usable.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings

    def resolve(self, credential: str) -> Identity | None:
        try:
            payload = decode_access_token(credential, settings=self._settings)
        except ValueError as exc:
            logger.debug("Rejected credential: %s", exc)
            return None

        user_id = payload.get("userId")
        role = payload.get("role")
        return Identity(
            user_id=str(user_id) if user_id else "",
            role=str(role) if role else "",
            email=payload.get("email"),
            full_name=payload.get("fullName"),
        )


__all__ = ["TokenIdentityResolver", "create_access_token", "decode_access_token"]
