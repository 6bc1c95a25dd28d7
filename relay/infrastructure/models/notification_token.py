"""SQLAlchemy model for push notification tokens."""

from sqlalchemy import Column, DateTime, ForeignKey, String

from relay.infrastructure.database import Base, generate_id
from relay.utils import utc_now_naive


class NotificationTokenModel(Base):
    """Device token registered by a user for push delivery."""

    __tablename__ = "notification_token"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), ForeignKey("user.id"), nullable=False, index=True)
    fcm_token = Column(String(255), nullable=False, unique=True)
    created_at = Column(DateTime(), nullable=False, default=utc_now_naive)
    revoked_at = Column(DateTime(), nullable=True)


__all__ = ["NotificationTokenModel"]
