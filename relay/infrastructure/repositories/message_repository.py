"""Persistence helpers for question chat messages."""

from __future__ import annotations

from sqlalchemy.orm import Session

from relay.domain.entities import QuestionMessage, User
from relay.infrastructure.models import QuestionMessageModel
from relay.utils import ensure_naive_utc, ensure_utc, utc_now


class QuestionMessageRepository:
    """Provide create operations for :class:`QuestionMessage` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, message: QuestionMessage) -> QuestionMessage:
        model = QuestionMessageModel(
            id=message.id,
            question_id=message.question_id,
            sender_id=message.sender_id,
            content=message.content,
            created_at=ensure_naive_utc(message.created_at or utc_now()),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: QuestionMessageModel) -> QuestionMessage:
        sender = None
        if model.sender is not None:
            sender = User(
                id=model.sender.id,
                full_name=model.sender.full_name,
                role=model.sender.role,
                email=model.sender.email,
            )
        return QuestionMessage(
            id=model.id,
            question_id=model.question_id,
            sender_id=model.sender_id,
            content=model.content,
            created_at=ensure_utc(model.created_at),
            sender=sender,
        )


__all__ = ["QuestionMessageRepository"]
