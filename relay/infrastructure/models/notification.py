"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Column, DateTime, ForeignKey, JSON, String, Text, UniqueConstraint

from relay.infrastructure.database import Base, generate_id
from relay.utils import utc_now_naive


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notification"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "type", "question_id", "answer_id", name="uq_notification_trigger"
        ),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), ForeignKey("user.id"), nullable=False, index=True)
    type = Column(String(50), nullable=False)
    title = Column(String(120), nullable=False)
    content = Column(Text, nullable=False)
    link = Column(String(255), nullable=True)
    meta = Column(JSON, nullable=False, default=dict)
    question_id = Column(String(36), nullable=True, index=True)
    answer_id = Column(String(36), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=utc_now_naive)
    read_at = Column(DateTime(), nullable=True)


__all__ = ["NotificationModel"]
