"""ORM models used by the application infrastructure."""

from .user import UserModel
from .question import QuestionModel
from .answer import AnswerModel
from .question_message import QuestionMessageModel
from .question_watcher import QuestionWatcherModel
from .notification import NotificationModel
from .notification_token import NotificationTokenModel

__all__ = [
    "UserModel",
    "QuestionModel",
    "AnswerModel",
    "QuestionMessageModel",
    "QuestionWatcherModel",
    "NotificationModel",
    "NotificationTokenModel",
]
