"""SQLAlchemy model for answers."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from relay.infrastructure.database import Base, generate_id
from relay.utils import utc_now_naive


class AnswerModel(Base):
    """Database representation of an answer and its edit history."""

    __tablename__ = "answer"

    id = Column(String(36), primary_key=True, default=generate_id)
    question_id = Column(String(36), ForeignKey("question.id"), nullable=False, index=True)
    author_id = Column(String(36), ForeignKey("user.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    is_pinned = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(), nullable=False, default=utc_now_naive)
    edit_count = Column(Integer, nullable=False, default=0)
    edited_at = Column(DateTime(), nullable=True)
    original_content = Column(Text, nullable=True)

    author = relationship("UserModel", lazy="joined")


__all__ = ["AnswerModel"]
