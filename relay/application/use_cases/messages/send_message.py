"""Use case for posting a chat message on a question."""

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
from relay.application.use_cases.notifications import (
    dispatch_notifications,
    message_trigger,
    resolve_recipients,
)
from relay.application.use_cases.validators import normalize_content, require_identity
from relay.domain.entities import QuestionMessage, RoomAddress
from relay.infrastructure.realtime import RelaySession, serialize_message

logger = logging.getLogger(__name__)


async def send_message(
    context: RelayContext,
    session: RelaySession,
    *,
    question_id: str | None,
    content: Any,
    ack: Acknowledge,
) -> None:
    """Persist a chat message, then broadcast it.

    Messages have no optimistic phase: when the write fails only the caller
    hears about it.
    """

    try:
        identity = require_identity(session.identity)
        if not question_id:
            raise RelayValidationError("questionId is required")
        content_to_save = normalize_content(
            content, empty_message="Message content must not be empty"
        )
        question = await context.store.get_question(question_id)
        if question is None:
            raise RelayValidationError("Question not found")
    except RelayValidationError as exc:
        await ack(ack_error(str(exc)))
        return

    try:
        message = await context.store.create_message(
            QuestionMessage(
                id=None,
                question_id=question.id,
                sender_id=identity.user_id,
                content=content_to_save,
            )
        )
    except Exception:
        logger.exception("Failed to persist message on question %s", question.id)
        await ack(ack_error("Failed to send message"))
        return

    try:
        recipients = await resolve_recipients(context, question, actor_id=identity.user_id)
    except Exception:
        logger.exception("Failed to resolve message recipients for question %s", question.id)
        recipients = []

    payload = serialize_message(message)
    await context.rooms.emit(RoomAddress.question(question.id), "message:new", payload)
    for recipient_id in recipients:
        await context.rooms.emit(RoomAddress.user(recipient_id), "message:new", payload)

    await ack(ack_ok(message=payload))

    context.tasks.spawn(
        dispatch_notifications(
            context,
            message_trigger(question, message, actor_id=identity.user_id),
            recipients=recipients,
        ),
        name=f"message:notify:{message.id}",
    )


__all__ = ["send_message"]
