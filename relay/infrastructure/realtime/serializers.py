"""Wire representations of relay entities."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from relay.domain.entities import (
    Answer,
    Identity,
    Notification,
    QuestionMessage,
    User,
)
from relay.utils import to_iso, utc_now


def _author_summary(user: User | None, fallback_id: str) -> dict[str, Any]:
    if user is None:
        return {"id": fallback_id, "fullName": None, "role": None}
    return user.author_summary()


def serialize_optimistic_answer(
    *,
    temp_id: str,
    question_id: str,
    content: str,
    identity: Identity,
    created_at: datetime | None = None,
) -> dict[str, Any]:
    """Return the provisional answer shown before the write completes."""

    return {
        "id": temp_id,
        "content": content,
        "isPinned": False,
        "author": identity.author_summary(),
        "createdAt": to_iso(created_at or utc_now()),
        "questionId": question_id,
        "votesCount": 0,
    }


def serialize_answer(answer: Answer) -> dict[str, Any]:
    return {
        "id": answer.id,
        "content": answer.content,
        "isPinned": answer.is_pinned,
        "author": _author_summary(answer.author, answer.author_id),
        "createdAt": to_iso(answer.created_at),
        "questionId": answer.question_id,
        "votesCount": 0,
    }


def serialize_answer_edit(answer: Answer) -> dict[str, Any]:
    return {
        "id": answer.id,
        "content": answer.content,
        "author": _author_summary(answer.author, answer.author_id),
        "editCount": answer.edit_count,
        "editedAt": to_iso(answer.edited_at or utc_now()),
        "originalContent": answer.original_content,
        "questionId": answer.question_id,
    }


def serialize_message(message: QuestionMessage) -> dict[str, Any]:
    return {
        "id": message.id,
        "content": message.content,
        "sender": _author_summary(message.sender, message.sender_id),
        "createdAt": to_iso(message.created_at),
        "questionId": message.question_id,
    }


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the ``notification:new`` payload for ``notification``."""

    return {
        "id": notification.id,
        "type": notification.type,
        "title": notification.title,
        "content": notification.content,
        "link": notification.link,
        "createdAt": to_iso(notification.created_at or utc_now()),
    }


__all__ = [
    "serialize_answer",
    "serialize_answer_edit",
    "serialize_message",
    "serialize_notification",
    "serialize_optimistic_answer",
]
