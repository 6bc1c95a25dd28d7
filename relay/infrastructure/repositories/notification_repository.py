"""Persistence helpers for notification entities."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from relay.domain.entities import Notification
from relay.infrastructure.models import NotificationModel
from relay.utils import ensure_naive_utc, ensure_utc, utc_now


class NotificationRepository:
    """Provide lookup and idempotent creation of :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find_for_trigger(
        self,
        *,
        user_id: str,
        type: str,
        question_id: str | None,
        answer_id: str | None,
    ) -> Notification | None:
        """Return the notification already created for this trigger, if any."""

        model = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.user_id == user_id,
                NotificationModel.type == type,
                NotificationModel.question_id == question_id,
                NotificationModel.answer_id == answer_id,
            )
            .order_by(NotificationModel.created_at.asc())
            .first()
        )
        return self._to_entity(model) if model else None

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def get_or_create(self, notification: Notification) -> tuple[Notification, bool]:
        """Return the stored notification for the trigger, creating it if needed.

        The second element is ``True`` when a new row was written. A concurrent
        writer that wins the unique constraint race is resolved by re-reading
        its row.
        """

        lookup = dict(
            user_id=notification.user_id,
            type=notification.type,
            question_id=notification.question_id,
            answer_id=notification.answer_id,
        )
        existing = self.find_for_trigger(**lookup)
        if existing is not None:
            return existing, False

        try:
            return self.create(notification), True
        except IntegrityError:
            self.session.rollback()
            existing = self.find_for_trigger(**lookup)
            if existing is None:
                raise
            return existing, False

    def list_for_user(self, user_id: str, *, limit: int | None = 50) -> list[Notification]:
        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .order_by(NotificationModel.created_at.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _apply_entity_to_model(model: NotificationModel, notification: Notification) -> None:
        model.id = notification.id or model.id
        model.user_id = notification.user_id
        model.type = notification.type
        model.title = notification.title
        model.content = notification.content
        model.link = notification.link
        model.meta = notification.meta or {}
        model.question_id = notification.question_id
        model.answer_id = notification.answer_id
        model.created_at = ensure_naive_utc(notification.created_at or utc_now())
        model.read_at = ensure_naive_utc(notification.read_at)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            type=model.type,
            title=model.title,
            content=model.content,
            link=model.link,
            meta=model.meta or {},
            question_id=model.question_id,
            answer_id=model.answer_id,
            created_at=ensure_utc(model.created_at),
            read_at=ensure_utc(model.read_at),
        )


__all__ = ["NotificationRepository"]
