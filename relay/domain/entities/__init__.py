"""Domain entities exposed by the application."""

from .answer import MAX_ANSWER_EDITS, Answer
from .identity import Identity
from .message import QuestionMessage
from .notification import (
    NOTIFICATION_TYPE_ANSWER_CREATED,
    NOTIFICATION_TYPE_MESSAGE_CREATED,
    Notification,
)
from .notification_token import NotificationToken
from .question import (
    APPROVAL_STATUS_APPROVED,
    APPROVAL_STATUS_PENDING,
    APPROVAL_STATUS_REJECTED,
    Question,
)
from .room import RoomAddress, RoomKind
from .user import User

__all__ = [
    "Answer",
    "MAX_ANSWER_EDITS",
    "Identity",
    "QuestionMessage",
    "Notification",
    "NOTIFICATION_TYPE_ANSWER_CREATED",
    "NOTIFICATION_TYPE_MESSAGE_CREATED",
    "NotificationToken",
    "Question",
    "APPROVAL_STATUS_APPROVED",
    "APPROVAL_STATUS_PENDING",
    "APPROVAL_STATUS_REJECTED",
    "RoomAddress",
    "RoomKind",
    "User",
]
