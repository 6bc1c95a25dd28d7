"""Domain entity representing a chat message posted on a question."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .user import User


@dataclass
class QuestionMessage:
    """Chat message exchanged inside a question room."""

    id: str | None
    question_id: str
    sender_id: str
    content: str
    created_at: datetime | None = None
    sender: User | None = None


__all__ = ["QuestionMessage"]
