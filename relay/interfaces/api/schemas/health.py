"""Schemas for the health endpoint."""

from pydantic import BaseModel


class HealthRead(BaseModel):
    status: str
    timestamp: str


__all__ = ["HealthRead"]
