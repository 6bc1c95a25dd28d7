"""SQLAlchemy model for questions."""

from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from relay.domain.entities import APPROVAL_STATUS_PENDING
from relay.infrastructure.database import Base, generate_id
from relay.utils import utc_now_naive


class QuestionModel(Base):
    """Database representation of a question."""

    __tablename__ = "question"

    id = Column(String(36), primary_key=True, default=generate_id)
    title = Column(String(255), nullable=False)
    author_id = Column(String(36), ForeignKey("user.id"), nullable=True, index=True)
    approval_status = Column(String(20), nullable=False, default=APPROVAL_STATUS_PENDING)
    created_at = Column(DateTime(), nullable=False, default=utc_now_naive)

    author = relationship("UserModel", lazy="joined")


__all__ = ["QuestionModel"]
