"""Persistence helpers for question entities."""

from __future__ import annotations

from sqlalchemy.orm import Session

from relay.domain.entities import Question
from relay.infrastructure.models import QuestionModel
from relay.utils import ensure_naive_utc, ensure_utc, utc_now


class QuestionRepository:
    """Provide read and create operations for :class:`Question` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, question_id: str) -> Question | None:
        model = self.session.get(QuestionModel, question_id)
        return self._to_entity(model) if model else None

    def create(self, question: Question) -> Question:
        model = QuestionModel(
            id=question.id,
            title=question.title,
            author_id=question.author_id,
            approval_status=question.approval_status,
            created_at=ensure_naive_utc(question.created_at or utc_now()),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: QuestionModel) -> Question:
        return Question(
            id=model.id,
            title=model.title,
            author_id=model.author_id,
            approval_status=model.approval_status,
            created_at=ensure_utc(model.created_at),
        )


__all__ = ["QuestionRepository"]
