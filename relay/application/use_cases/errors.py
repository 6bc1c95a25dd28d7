"""Errors and acknowledgement helpers shared by relay use cases."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

Acknowledge = Callable[[dict[str, Any]], Awaitable[None]]


class RelayValidationError(ValueError):
    """Raised when an inbound action fails a pre-check.

    These are reported to the caller's acknowledgement only and never
    broadcast.
    """


def ack_ok(**extra: Any) -> dict[str, Any]:
    return {"ok": True, **extra}


def ack_error(message: str) -> dict[str, Any]:
    return {"ok": False, "error": message}


__all__ = ["Acknowledge", "RelayValidationError", "ack_error", "ack_ok"]
