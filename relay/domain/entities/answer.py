"""Domain entity representing an answer to a question."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .user import User

MAX_ANSWER_EDITS = 1


@dataclass
class Answer:
    """Answer content together with its single-edit bookkeeping."""

    id: str | None
    question_id: str
    author_id: str
    content: str
    is_pinned: bool = False
    created_at: datetime | None = None
    edit_count: int = 0
    edited_at: datetime | None = None
    original_content: str | None = None
    author: User | None = None

    @property
    def can_be_edited(self) -> bool:
        return self.edit_count < MAX_ANSWER_EDITS


__all__ = ["Answer", "MAX_ANSWER_EDITS"]
