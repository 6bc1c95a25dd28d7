"""Validation helpers shared by the answer and message use cases."""

from __future__ import annotations

import json
from typing import Any

from relay.application.use_cases.errors import RelayValidationError
from relay.domain.entities import Identity, RoomAddress, Question

INVALID_CONTENT_FORMAT = "Invalid content format"


def is_empty_content(content: Any) -> bool:
    """Return ``True`` for missing content, blank text or a rich-text document without blocks."""

    if content is None:
        return True
    if isinstance(content, str):
        return not content.strip()
    if isinstance(content, dict):
        blocks = content.get("blocks")
        return isinstance(blocks, list) and len(blocks) == 0
    return False


def normalize_content(content: Any, *, empty_message: str, strip: bool = False) -> str:
    """Return the stored text form of ``content`` or raise ``RelayValidationError``.

    Plain strings are kept as-is (trimmed when ``strip``); rich-text documents
    are stored as compact JSON.
    """

    if is_empty_content(content):
        raise RelayValidationError(empty_message)
    if isinstance(content, str):
        return content.strip() if strip else content
    if isinstance(content, dict):
        return json.dumps(content, ensure_ascii=False, separators=(",", ":"))
    raise RelayValidationError(INVALID_CONTENT_FORMAT)


def require_identity(identity: Identity | None) -> Identity:
    if identity is None or not identity.user_id:
        raise RelayValidationError("UNAUTHENTICATED")
    return identity


def question_rooms(question: Question) -> list[RoomAddress]:
    """Rooms that see answer activity: the question room plus its author's room."""

    rooms = [RoomAddress.question(question.id)]
    if question.author_id:
        rooms.append(RoomAddress.user(question.author_id))
    return rooms


__all__ = [
    "INVALID_CONTENT_FORMAT",
    "is_empty_content",
    "normalize_content",
    "question_rooms",
    "require_identity",
]
