"""Persistence helpers for question watchers."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from relay.infrastructure.models import QuestionWatcherModel


class QuestionWatcherRepository:
    """Query and register users following a question."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_user_ids(
        self, question_id: str, *, exclude_user_id: str | None = None
    ) -> Sequence[str]:
        query = self.session.query(QuestionWatcherModel.user_id).filter(
            QuestionWatcherModel.question_id == question_id
        )
        if exclude_user_id is not None:
            query = query.filter(QuestionWatcherModel.user_id != exclude_user_id)
        return [row.user_id for row in query.all() if row.user_id]

    def add(self, question_id: str, user_id: str) -> None:
        exists = (
            self.session.query(QuestionWatcherModel.id)
            .filter(
                QuestionWatcherModel.question_id == question_id,
                QuestionWatcherModel.user_id == user_id,
            )
            .first()
        )
        if exists:
            return
        self.session.add(QuestionWatcherModel(question_id=question_id, user_id=user_id))
        self.session.commit()


__all__ = ["QuestionWatcherRepository"]
