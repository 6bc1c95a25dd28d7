"""Dispatch of inbound relay frames to use cases."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import ValidationError

from relay.application.context import RelayContext
from relay.application.use_cases.answers import send_answer, update_answer
from relay.application.use_cases.errors import Acknowledge, ack_error
from relay.application.use_cases.messages import send_message
from relay.application.use_cases.sessions import (
    join_question_room,
    join_user_room,
    leave_question_room,
)
from relay.infrastructure.realtime import RelaySession
from relay.interfaces.api.schemas import (
    AnswerSendPayload,
    AnswerUpdatePayload,
    MessageSendPayload,
)

logger = logging.getLogger(__name__)

Reply = Callable[[dict[str, Any]], Awaitable[None]]
Handler = Callable[[RelayContext, RelaySession, Any, Acknowledge], Awaitable[None]]

INVALID_PAYLOAD = "Invalid payload"
DEFAULT_ERRORS = {
    "answer:send": "Failed to send answer",
    "answer:update": "Failed to update answer",
    "message:send": "Failed to send message",
}


class AckReply:
    """Acknowledge a frame at most once, and only if the client asked for it."""

    def __init__(self, reply: Reply, ack_id: Any) -> None:
        self._reply = reply
        self._ack_id = ack_id
        self.sent = False

    async def __call__(self, payload: dict[str, Any]) -> None:
        if self.sent:
            return
        self.sent = True
        if self._ack_id is None:
            return
        await self._reply({"type": "ack", "ack": self._ack_id, "data": payload})


def _scalar_id(data: Any) -> str | None:
    if isinstance(data, dict):
        data = data.get("id")
    if isinstance(data, bool) or data is None:
        return None
    if isinstance(data, (str, int)):
        return str(data) or None
    return None


async def _join_user(context, session, data, ack) -> None:
    join_user_room(context, session, _scalar_id(data))


async def _join_question(context, session, data, ack) -> None:
    join_question_room(context, session, _scalar_id(data))


async def _leave_question(context, session, data, ack) -> None:
    leave_question_room(context, session, _scalar_id(data))


async def _answer_send(context, session, data, ack) -> None:
    try:
        payload = AnswerSendPayload.model_validate(data or {})
    except ValidationError:
        await ack(ack_error(INVALID_PAYLOAD))
        return
    await send_answer(
        context,
        session,
        question_id=payload.question_id,
        content=payload.content,
        temp_id=payload.temp_id,
        ack=ack,
    )


async def _answer_update(context, session, data, ack) -> None:
    try:
        payload = AnswerUpdatePayload.model_validate(data or {})
    except ValidationError:
        await ack(ack_error(INVALID_PAYLOAD))
        return
    await update_answer(
        context,
        session,
        question_id=payload.question_id,
        answer_id=payload.answer_id,
        content=payload.content,
        edit_count=payload.edit_count,
        edited_at=payload.edited_at,
        original_content=payload.original_content,
        ack=ack,
    )


async def _message_send(context, session, data, ack) -> None:
    try:
        payload = MessageSendPayload.model_validate(data or {})
    except ValidationError:
        await ack(ack_error(INVALID_PAYLOAD))
        return
    await send_message(
        context,
        session,
        question_id=payload.question_id,
        content=payload.content,
        ack=ack,
    )


EVENT_HANDLERS: dict[str, Handler] = {
    "join-user": _join_user,
    "join-question": _join_question,
    "leave-question": _leave_question,
    "answer:send": _answer_send,
    "answer:update": _answer_update,
    "message:send": _message_send,
}


async def dispatch_frame(
    context: RelayContext, session: RelaySession, frame: Any, *, reply: Reply
) -> None:
    """Route one client frame ``{"type", "data", "ack"}`` to its handler."""

    if not isinstance(frame, dict):
        return

    event = frame.get("type")
    if event == "ping":
        await reply({"type": "pong"})
        return

    handler = EVENT_HANDLERS.get(event) if isinstance(event, str) else None
    if handler is None:
        logger.debug("Ignoring unknown event %r from session %s", event, session.id)
        return

    ack = AckReply(reply, frame.get("ack"))
    try:
        await handler(context, session, frame.get("data"), ack)
    except Exception:
        logger.exception("Error handling %s for session %s", event, session.id)
        await ack(ack_error(DEFAULT_ERRORS.get(event, "Request failed")))


__all__ = ["AckReply", "EVENT_HANDLERS", "dispatch_frame"]
