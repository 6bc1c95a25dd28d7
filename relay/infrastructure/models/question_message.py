"""SQLAlchemy model for question chat messages."""

from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from relay.infrastructure.database import Base, generate_id
from relay.utils import utc_now_naive


class QuestionMessageModel(Base):
    """Database representation of a chat message."""

    __tablename__ = "question_message"

    id = Column(String(36), primary_key=True, default=generate_id)
    question_id = Column(String(36), ForeignKey("question.id"), nullable=False, index=True)
    sender_id = Column(String(36), ForeignKey("user.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(), nullable=False, default=utc_now_naive)

    sender = relationship("UserModel", lazy="joined")


__all__ = ["QuestionMessageModel"]
