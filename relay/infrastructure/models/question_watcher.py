"""SQLAlchemy model for users following a question."""

from sqlalchemy import Column, DateTime, ForeignKey, String, UniqueConstraint

from relay.infrastructure.database import Base, generate_id
from relay.utils import utc_now_naive


class QuestionWatcherModel(Base):
    """Subscription of a user to updates on a question."""

    __tablename__ = "question_watcher"
    __table_args__ = (
        UniqueConstraint("question_id", "user_id", name="uq_question_watcher"),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    question_id = Column(String(36), ForeignKey("question.id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("user.id"), nullable=False, index=True)
    created_at = Column(DateTime(), nullable=False, default=utc_now_naive)


__all__ = ["QuestionWatcherModel"]
