"""Domain entity representing a user."""

from dataclasses import dataclass


@dataclass
class User:
    """Public attributes of a user taking part in discussions."""

    id: str
    full_name: str | None
    role: str
    email: str | None = None

    def author_summary(self) -> dict[str, str | None]:
        return {"id": self.id, "fullName": self.full_name, "role": self.role}


__all__ = ["User"]
