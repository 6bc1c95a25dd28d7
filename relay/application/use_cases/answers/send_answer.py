"""Use case for answering a question with an optimistic broadcast."""

from __future__ import annotations

import logging
from typing import Any

from relay.application.context import RelayContext
from relay.application.use_cases.errors import (
    Acknowledge,
    RelayValidationError,
    ack_error,
    ack_ok,
)
from relay.application.use_cases.notifications import answer_trigger, dispatch_notifications
from relay.application.use_cases.validators import (
    normalize_content,
    question_rooms,
    require_identity,
)
from relay.domain.entities import Answer, Identity, Question, RoomAddress
from relay.infrastructure.realtime import (
    RelaySession,
    serialize_answer,
    serialize_optimistic_answer,
)

logger = logging.getLogger(__name__)


async def send_answer(
    context: RelayContext,
    session: RelaySession,
    *,
    question_id: str | None,
    content: Any,
    temp_id: str | None,
    ack: Acknowledge,
) -> None:
    """Broadcast an answer immediately and persist it in the background.

    The caller is acknowledged right after the optimistic ``answer:new``
    broadcast. The write outcome is only visible as ``answer:replace`` or
    ``answer:remove-temp`` in the same rooms.
    """

    try:
        identity = require_identity(session.identity)
        if not question_id:
            raise RelayValidationError("questionId is required")
        if not temp_id:
            raise RelayValidationError("tempId is required")
        content_to_save = normalize_content(
            content, empty_message="Answer content must not be empty"
        )
        question = await context.store.get_question(question_id)
        if question is None:
            raise RelayValidationError("Question not found")
        if not question.is_approved:
            raise RelayValidationError("Question is not approved yet, so it cannot be answered")
    except RelayValidationError as exc:
        await ack(ack_error(str(exc)))
        return

    if not context.submission_ledger.claim(identity.user_id, temp_id):
        logger.info(
            "Ignoring repeated answer:send %s from user %s", temp_id, identity.user_id
        )
        await ack(ack_ok())
        return

    rooms = question_rooms(question)
    projection = serialize_optimistic_answer(
        temp_id=temp_id,
        question_id=question.id,
        content=content_to_save,
        identity=identity,
    )
    await context.rooms.emit_to_rooms(rooms, "answer:new", projection)
    await ack(ack_ok())

    context.tasks.spawn(
        persist_answer(
            context,
            identity=identity,
            question=question,
            content=content_to_save,
            temp_id=temp_id,
            rooms=rooms,
        ),
        name=f"answer:send:{temp_id}",
    )


async def persist_answer(
    context: RelayContext,
    *,
    identity: Identity,
    question: Question,
    content: str,
    temp_id: str,
    rooms: list[RoomAddress],
) -> Answer | None:
    """Write the answer, reconcile the optimistic view, then notify."""

    try:
        answer = await context.store.create_answer(
            Answer(
                id=None,
                question_id=question.id,
                author_id=identity.user_id,
                content=content,
            )
        )
    except Exception:
        logger.exception(
            "Failed to persist answer %s on question %s; retracting", temp_id, question.id
        )
        context.submission_ledger.discard(identity.user_id, temp_id)
        await context.rooms.emit_to_rooms(rooms, "answer:remove-temp", {"tempId": temp_id})
        return None

    await context.rooms.emit_to_rooms(
        rooms, "answer:replace", {"tempId": temp_id, "answer": serialize_answer(answer)}
    )
    await dispatch_notifications(
        context, answer_trigger(question, answer, actor_id=identity.user_id)
    )
    return answer


__all__ = ["persist_answer", "send_answer"]
