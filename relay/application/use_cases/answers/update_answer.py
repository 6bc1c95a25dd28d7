"""Use case for the single permitted edit of an answer."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from relay.application.context import RelayContext
from relay.application.use_cases.errors import (
    Acknowledge,
    RelayValidationError,
    ack_error,
    ack_ok,
)
from relay.application.use_cases.validators import normalize_content, require_identity
from relay.domain.entities import Answer, RoomAddress
from relay.infrastructure.realtime import RelaySession, serialize_answer_edit
from relay.utils import to_iso, utc_now

logger = logging.getLogger(__name__)

EMPTY_CONTENT = "Content must not be empty"
ALREADY_EDITED = "An answer can only be edited once"
EDIT_CLAIM = "answer:update"


async def update_answer(
    context: RelayContext,
    session: RelaySession,
    *,
    question_id: str | None,
    answer_id: str | None,
    content: Any,
    edit_count: int | None = None,
    edited_at: str | None = None,
    original_content: str | None = None,
    ack: Acknowledge,
) -> None:
    """Validate an edit, broadcast it optimistically and persist it in the background."""

    try:
        identity = require_identity(session.identity)
        if not question_id or not answer_id:
            raise RelayValidationError("questionId and answerId are required")
        if content is None:
            raise RelayValidationError(EMPTY_CONTENT)

        answer = await context.store.get_answer(answer_id)
        if answer is None or answer.question_id != question_id:
            raise RelayValidationError("Answer not found")
        if answer.author_id != identity.user_id:
            raise RelayValidationError("You can only edit your own answers")
        if not answer.can_be_edited:
            raise RelayValidationError(ALREADY_EDITED)

        question = await context.store.get_question(question_id)
        if question is None or not question.is_approved:
            raise RelayValidationError("Answers to unapproved questions cannot be edited")

        content_to_save = normalize_content(content, empty_message=EMPTY_CONTENT, strip=True)
        # Claimed after the last await so two pending edits cannot both pass.
        if not context.edit_ledger.claim(EDIT_CLAIM, answer_id):
            raise RelayValidationError(ALREADY_EDITED)
    except RelayValidationError as exc:
        await ack(ack_error(str(exc)))
        return

    room = RoomAddress.question(question_id)
    optimistic = serialize_answer_edit(answer)
    optimistic.update(
        content=content_to_save,
        editCount=edit_count if edit_count is not None else 1,
        editedAt=edited_at or to_iso(utc_now()),
        originalContent=original_content or answer.content,
    )
    await context.rooms.emit(room, "answer:updated", optimistic)
    await ack(ack_ok())

    context.tasks.spawn(
        persist_answer_edit(context, answer_id=answer_id, content=content_to_save, room=room),
        name=f"answer:update:{answer_id}",
    )


async def persist_answer_edit(
    context: RelayContext,
    *,
    answer_id: str,
    content: str,
    room: RoomAddress,
    edited_at: datetime | None = None,
) -> Answer | None:
    """Store the edit and broadcast either the stored record or a failure."""

    try:
        updated = await context.store.apply_answer_edit(
            answer_id, content=content, edited_at=edited_at or utc_now()
        )
    except Exception as exc:
        logger.error("Error persisting answer update %s: %s", answer_id, exc, exc_info=exc)
        context.edit_ledger.discard(EDIT_CLAIM, answer_id)
        await context.rooms.emit(
            room,
            "answer:update-failed",
            {
                "id": answer_id,
                "questionId": room.id,
                "error": str(exc) or "Failed to update answer",
            },
        )
        return None

    await context.rooms.emit(room, "answer:updated", serialize_answer_edit(updated))
    return updated


__all__ = ["persist_answer_edit", "update_answer"]
