"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

NOTIFICATION_TYPE_ANSWER_CREATED = "ANSWER_CREATED"
NOTIFICATION_TYPE_MESSAGE_CREATED = "MESSAGE_CREATED"


@dataclass
class Notification:
    """Durable notice about new content on a question.

    ``answer_id`` stores the id of the triggering content item, which is a
    message id for ``MESSAGE_CREATED`` notifications.
    """

    id: str | None
    user_id: str
    type: str
    title: str
    content: str
    link: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)
    question_id: str | None = None
    answer_id: str | None = None
    created_at: datetime | None = None
    read_at: datetime | None = None


__all__ = [
    "NOTIFICATION_TYPE_ANSWER_CREATED",
    "NOTIFICATION_TYPE_MESSAGE_CREATED",
    "Notification",
]
