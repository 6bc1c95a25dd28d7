"""Persistence helpers for push notification tokens."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from relay.domain.entities import NotificationToken
from relay.infrastructure.models import NotificationTokenModel
from relay.utils import ensure_naive_utc, ensure_utc, utc_now


class NotificationTokenRepository:
    """Provide access to the push destinations registered by users."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_active_for_user(self, user_id: str) -> Sequence[NotificationToken]:
        query = (
            self.session.query(NotificationTokenModel)
            .filter(NotificationTokenModel.user_id == user_id)
            .filter(NotificationTokenModel.revoked_at.is_(None))
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, token: NotificationToken) -> NotificationToken:
        model = NotificationTokenModel(
            id=token.id,
            user_id=token.user_id,
            fcm_token=token.fcm_token,
            created_at=ensure_naive_utc(token.created_at or utc_now()),
            revoked_at=ensure_naive_utc(token.revoked_at),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: NotificationTokenModel) -> NotificationToken:
        return NotificationToken(
            id=model.id,
            user_id=model.user_id,
            fcm_token=model.fcm_token,
            created_at=ensure_utc(model.created_at),
            revoked_at=ensure_utc(model.revoked_at),
        )


__all__ = ["NotificationTokenRepository"]
