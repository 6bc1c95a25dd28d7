"""Addressing helpers for broadcast rooms."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RoomKind(str, Enum):
    """Kinds of rooms a session can belong to."""

    USER = "user"
    QUESTION = "question"


@dataclass(frozen=True)
class RoomAddress:
    """Tagged room identifier rendered as ``<kind>:<id>`` on the wire."""

    kind: RoomKind
    id: str

    @classmethod
    def user(cls, user_id: str) -> "RoomAddress":
        return cls(RoomKind.USER, str(user_id))

    @classmethod
    def question(cls, question_id: str) -> "RoomAddress":
        return cls(RoomKind.QUESTION, str(question_id))

    @classmethod
    def parse(cls, value: str) -> "RoomAddress":
        """Build an address from its ``<kind>:<id>`` string form."""

        kind, separator, identifier = value.partition(":")
        if not separator or not identifier:
            raise ValueError(f"Invalid room address: {value!r}")
        try:
            room_kind = RoomKind(kind)
        except ValueError as exc:
            raise ValueError(f"Unknown room kind: {kind!r}") from exc
        return cls(room_kind, identifier)

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.id}"


__all__ = ["RoomAddress", "RoomKind"]
