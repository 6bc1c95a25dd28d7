"""Domain entity representing a question (discussion topic)."""

from dataclasses import dataclass
from datetime import datetime

APPROVAL_STATUS_PENDING = "PENDING"
APPROVAL_STATUS_APPROVED = "APPROVED"
APPROVAL_STATUS_REJECTED = "REJECTED"


@dataclass
class Question:
    """Topic that answers and chat messages are attached to."""

    id: str
    title: str
    author_id: str | None
    approval_status: str = APPROVAL_STATUS_PENDING
    created_at: datetime | None = None

    @property
    def is_approved(self) -> bool:
        return self.approval_status == APPROVAL_STATUS_APPROVED


__all__ = [
    "APPROVAL_STATUS_APPROVED",
    "APPROVAL_STATUS_PENDING",
    "APPROVAL_STATUS_REJECTED",
    "Question",
]
