"""Repository implementations for infrastructure layer."""

from .answer_repository import AnswerEditConflictError, AnswerRepository
from .message_repository import QuestionMessageRepository
from .notification_repository import NotificationRepository
from .notification_token_repository import NotificationTokenRepository
from .question_repository import QuestionRepository
from .user_repository import UserRepository
from .watcher_repository import QuestionWatcherRepository

__all__ = [
    "AnswerEditConflictError",
    "AnswerRepository",
    "QuestionMessageRepository",
    "NotificationRepository",
    "NotificationTokenRepository",
    "QuestionRepository",
    "UserRepository",
    "QuestionWatcherRepository",
]
