"""Liveness endpoint."""

from fastapi import APIRouter

from relay.interfaces.api.schemas import HealthRead
from relay.utils import to_iso, utc_now

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthRead)
def health() -> HealthRead:
    """Report that the relay process is serving requests."""

    return HealthRead(status="ok", timestamp=to_iso(utc_now()) or "")
