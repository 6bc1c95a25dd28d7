"""Async facade over the SQLAlchemy repositories used by the relay."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime
from typing import TypeVar

import anyio
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from relay.domain.entities import (
    Answer,
    Notification,
    NotificationToken,
    Question,
    QuestionMessage,
)
from relay.infrastructure.database import (
    build_session_factory,
    engine as default_engine,
    initialize_database,
    session_scope,
)
from relay.infrastructure.repositories import (
    AnswerRepository,
    NotificationRepository,
    NotificationTokenRepository,
    QuestionMessageRepository,
    QuestionRepository,
    QuestionWatcherRepository,
)

T = TypeVar("T")


class RelayStore:
    """Run blocking repository calls in worker threads, one session per call."""

    def __init__(self, engine: Engine | None = None) -> None:
        self.engine = engine or default_engine
        self._session_factory = build_session_factory(self.engine)

    def initialize(self) -> None:
        """Create missing tables on the bound database."""

        initialize_database(self.engine)

    def dispose(self) -> None:
        self.engine.dispose()

    def session(self) -> Session:
        """Return a new synchronous session, mainly for seeding and scripts."""

        return self._session_factory()

    async def run(self, operation: Callable[[Session], T]) -> T:
        return await anyio.to_thread.run_sync(self._call, operation)

    def _call(self, operation: Callable[[Session], T]) -> T:
        with session_scope(self._session_factory) as session:
            return operation(session)

    async def get_question(self, question_id: str) -> Question | None:
        return await self.run(lambda session: QuestionRepository(session).get(question_id))

    async def get_answer(self, answer_id: str) -> Answer | None:
        return await self.run(lambda session: AnswerRepository(session).get(answer_id))

    async def create_answer(self, answer: Answer) -> Answer:
        return await self.run(lambda session: AnswerRepository(session).create(answer))

    async def apply_answer_edit(
        self, answer_id: str, *, content: str, edited_at: datetime
    ) -> Answer:
        return await self.run(
            lambda session: AnswerRepository(session).apply_edit(
                answer_id, content=content, edited_at=edited_at
            )
        )

    async def create_message(self, message: QuestionMessage) -> QuestionMessage:
        return await self.run(lambda session: QuestionMessageRepository(session).create(message))

    async def list_watcher_ids(
        self, question_id: str, *, exclude_user_id: str | None = None
    ) -> Sequence[str]:
        return await self.run(
            lambda session: QuestionWatcherRepository(session).list_user_ids(
                question_id, exclude_user_id=exclude_user_id
            )
        )

    async def get_or_create_notification(
        self, notification: Notification
    ) -> tuple[Notification, bool]:
        return await self.run(
            lambda session: NotificationRepository(session).get_or_create(notification)
        )

    async def list_push_tokens(self, user_id: str) -> Sequence[NotificationToken]:
        return await self.run(
            lambda session: NotificationTokenRepository(session).list_active_for_user(user_id)
        )


__all__ = ["RelayStore"]
