"""Domain entity representing a registered push destination."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class NotificationToken:
    """Device token a user registered for push delivery."""

    id: str | None
    user_id: str
    fcm_token: str
    created_at: datetime | None = None
    revoked_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.revoked_at is None


__all__ = ["NotificationToken"]
