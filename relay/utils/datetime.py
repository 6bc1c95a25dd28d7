"""Helpers for working with UTC timestamps."""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""

    return datetime.now(tz=timezone.utc)


def utc_now_naive() -> datetime:
    """Return the current UTC time without ``tzinfo`` for ``DATETIME`` columns."""

    return utc_now().replace(tzinfo=None)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Normalize ``value`` so it is expressed as an aware UTC datetime.

    Naive values coming back from the database are assumed to already be UTC.
    """

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def ensure_naive_utc(value: datetime | None) -> datetime | None:
    """Return ``value`` converted to UTC with ``tzinfo`` stripped."""

    normalized = ensure_utc(value)
    if normalized is None:
        return None
    return normalized.replace(tzinfo=None)


def to_iso(value: datetime | None) -> str | None:
    """Render ``value`` as an ISO-8601 UTC string with a ``Z`` suffix."""

    normalized = ensure_utc(value)
    if normalized is None:
        return None
    return normalized.isoformat(timespec="milliseconds").replace("+00:00", "Z")
