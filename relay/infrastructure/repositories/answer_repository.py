"""Persistence helpers for answer entities."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from relay.domain.entities import Answer, User
from relay.infrastructure.models import AnswerModel
from relay.utils import ensure_naive_utc, ensure_utc, utc_now


class AnswerEditConflictError(ValueError):
    """Raised when an answer was already edited by the time the write lands."""


class AnswerRepository:
    """Provide CRUD operations for :class:`Answer` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, answer_id: str) -> Answer | None:
        model = self.session.get(AnswerModel, answer_id)
        return self._to_entity(model) if model else None

    def create(self, answer: Answer) -> Answer:
        model = AnswerModel(
            id=answer.id,
            question_id=answer.question_id,
            author_id=answer.author_id,
            content=answer.content,
            is_pinned=answer.is_pinned,
            created_at=ensure_naive_utc(answer.created_at or utc_now()),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def apply_edit(self, answer_id: str, *, content: str, edited_at: datetime) -> Answer:
        """Store the single allowed edit of an answer.

        The pre-edit content is snapshotted into ``original_content``. The
        update only matches rows that were never edited, so of two racing
        edits exactly one wins and the snapshot is written once.
        """

        model = self.session.get(AnswerModel, answer_id)
        if model is None:
            msg = f"Answer with id {answer_id} not found"
            raise ValueError(msg)

        updated_rows = (
            self.session.query(AnswerModel)
            .filter(AnswerModel.id == answer_id, AnswerModel.edit_count == 0)
            .update(
                {
                    AnswerModel.content: content,
                    AnswerModel.edit_count: 1,
                    AnswerModel.edited_at: ensure_naive_utc(edited_at),
                    AnswerModel.original_content: model.original_content or model.content,
                },
                synchronize_session=False,
            )
        )
        if updated_rows == 0:
            self.session.rollback()
            raise AnswerEditConflictError("Answer can only be edited once")

        self.session.commit()
        self.session.expire_all()
        refreshed = self.session.get(AnswerModel, answer_id)
        return self._to_entity(refreshed)

    @staticmethod
    def _to_entity(model: AnswerModel) -> Answer:
        author = None
        if model.author is not None:
            author = User(
                id=model.author.id,
                full_name=model.author.full_name,
                role=model.author.role,
                email=model.author.email,
            )
        return Answer(
            id=model.id,
            question_id=model.question_id,
            author_id=model.author_id,
            content=model.content,
            is_pinned=bool(model.is_pinned),
            created_at=ensure_utc(model.created_at),
            edit_count=model.edit_count or 0,
            edited_at=ensure_utc(model.edited_at),
            original_content=model.original_content,
            author=author,
        )


__all__ = ["AnswerEditConflictError", "AnswerRepository"]
