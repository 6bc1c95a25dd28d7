"""Domain entity describing an authenticated caller."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """Validated identity attached to a relay session."""

    user_id: str
    role: str
    email: str | None = None
    full_name: str | None = None

    def author_summary(self) -> dict[str, str | None]:
        """Return the public author block used in optimistic projections."""

        return {"id": self.user_id, "fullName": self.full_name, "role": self.role}


__all__ = ["Identity"]
