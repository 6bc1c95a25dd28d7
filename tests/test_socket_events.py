"""Tests for routing inbound frames to relay handlers."""

from __future__ import annotations

import pytest

from relay.domain.entities import RoomAddress
from relay.interfaces.api.schemas import AnswerSendPayload, AnswerUpdatePayload
from relay.interfaces.api.socket_events import dispatch_frame

pytestmark = pytest.mark.anyio


class _Replies:
    def __init__(self) -> None:
        self.frames: list[dict] = []

    async def __call__(self, frame: dict) -> None:
        self.frames.append(frame)


async def test_ping_is_answered_with_pong(context, connect):
    session, _ = connect("user-a")
    replies = _Replies()

    await dispatch_frame(context, session, {"type": "ping"}, reply=replies)

    assert replies.frames == [{"type": "pong"}]


async def test_unknown_events_and_malformed_frames_are_ignored(context, connect):
    session, _ = connect("user-a")
    replies = _Replies()

    await dispatch_frame(context, session, {"type": "vote:cast", "ack": 1}, reply=replies)
    await dispatch_frame(context, session, ["not", "a", "frame"], reply=replies)

    assert replies.frames == []


async def test_room_events_accept_plain_and_wrapped_ids(context, connect):
    session, _ = connect("user-a")
    replies = _Replies()

    await dispatch_frame(context, session, {"type": "join-question", "data": 7}, reply=replies)
    await dispatch_frame(
        context, session, {"type": "join-question", "data": {"id": "q-2"}}, reply=replies
    )
    assert {RoomAddress.question("7"), RoomAddress.question("q-2")} <= session.rooms

    await dispatch_frame(context, session, {"type": "leave-question", "data": "7"}, reply=replies)
    await dispatch_frame(context, session, {"type": "join-user", "data": "user-z"}, reply=replies)

    assert RoomAddress.question("7") not in session.rooms
    assert RoomAddress.user("user-z") in session.rooms
    assert replies.frames == []


async def test_ack_echoes_client_identifier(context, connect, seed):
    seed.question("q-1", author_id="user-a")
    session, _ = connect("user-b")
    replies = _Replies()

    await dispatch_frame(
        context,
        session,
        {"type": "message:send", "data": {"questionId": "q-1", "content": "Hi"}, "ack": "req-1"},
        reply=replies,
    )
    await context.tasks.drain()

    assert len(replies.frames) == 1
    assert replies.frames[0]["type"] == "ack"
    assert replies.frames[0]["ack"] == "req-1"
    assert replies.frames[0]["data"]["ok"] is True


async def test_frames_without_ack_get_no_reply(context, connect):
    session, _ = connect("user-b")
    replies = _Replies()

    await dispatch_frame(
        context,
        session,
        {"type": "answer:send", "data": {"questionId": "missing", "content": "Hi", "tempId": "t"}},
        reply=replies,
    )

    assert replies.frames == []


async def test_invalid_payload_is_acknowledged_as_error(context, connect):
    session, _ = connect("user-b")
    replies = _Replies()

    await dispatch_frame(
        context, session, {"type": "answer:update", "data": "oops", "ack": 3}, reply=replies
    )

    assert replies.frames == [
        {"type": "ack", "ack": 3, "data": {"ok": False, "error": "Invalid payload"}}
    ]


async def test_unexpected_handler_error_is_acknowledged(context, connect, monkeypatch):
    session, _ = connect("user-b")
    replies = _Replies()

    async def exploding_lookup(question_id):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(context.store, "get_question", exploding_lookup)

    await dispatch_frame(
        context,
        session,
        {"type": "answer:send", "data": {"questionId": "q-1", "content": "Hi", "tempId": "t"}, "ack": 9},
        reply=replies,
    )

    assert replies.frames == [
        {"type": "ack", "ack": 9, "data": {"ok": False, "error": "Failed to send answer"}}
    ]


def test_payload_aliases_and_numeric_ids() -> None:
    send = AnswerSendPayload.model_validate({"topicId": 12, "content": "Hi", "tempId": 99})
    update = AnswerUpdatePayload.model_validate(
        {"questionId": "q-1", "answerId": 5, "content": "x", "editCount": 1, "extra": True}
    )

    assert send.question_id == "12"
    assert send.temp_id == "99"
    assert update.answer_id == "5"
    assert update.edit_count == 1
