"""Tests for connection authentication and room membership."""

from __future__ import annotations

from datetime import timedelta

import pytest

from relay.application.use_cases.sessions import (
    INVALID_TOKEN,
    NO_TOKEN,
    AuthenticationError,
    Handshake,
    authenticate_session,
    end_session,
    extract_credential,
    join_question_room,
    join_user_room,
    leave_question_room,
    reject_session,
)
from relay.domain.entities import RoomAddress
from relay.infrastructure.realtime import RelaySession
from relay.infrastructure.security import create_access_token


def _token(settings, **claims) -> str:
    return create_access_token(claims, settings=settings)


def test_credential_sources_are_checked_in_priority_order() -> None:
    handshake = Handshake(
        cookies={"auth_token": "from-cookie"},
        auth={"token": "from-auth"},
        query={"token": "from-query"},
        headers={"authorization": "Bearer from-header"},
    )

    assert extract_credential(handshake, cookie_name="auth_token") == "from-cookie"

    handshake.cookies = {}
    assert extract_credential(handshake, cookie_name="auth_token") == "from-auth"

    handshake.auth = {}
    assert extract_credential(handshake, cookie_name="auth_token") == "from-query"

    handshake.query = {}
    assert extract_credential(handshake, cookie_name="auth_token") == "from-header"


def test_blank_or_non_bearer_values_are_ignored() -> None:
    handshake = Handshake(
        cookies={"auth_token": "   "},
        headers={"authorization": "Basic dXNlcjpwYXNz"},
    )

    assert extract_credential(handshake, cookie_name="auth_token") is None


def test_authenticate_joins_personal_room(context, settings) -> None:
    session = RelaySession(sender=lambda frame: None)
    token = _token(settings, userId="user-a", role="USER", fullName="Alice")

    identity = authenticate_session(context, session, Handshake(query={"token": token}))

    assert identity.user_id == "user-a"
    assert identity.full_name == "Alice"
    assert session.identity == identity
    assert session.rooms == {RoomAddress.user("user-a")}
    assert context.rooms.member_count(RoomAddress.user("user-a")) == 1


def test_missing_credential_is_reported_as_no_token(context) -> None:
    session = RelaySession(sender=lambda frame: None)

    with pytest.raises(AuthenticationError) as excinfo:
        authenticate_session(context, session, Handshake())

    assert excinfo.value.reason == NO_TOKEN
    assert session.identity is None
    assert session.rooms == set()


@pytest.mark.parametrize(
    "claims",
    [
        {"role": "USER"},
        {"userId": "user-a"},
        {"userId": "", "role": "USER"},
    ],
)
def test_incomplete_identity_is_rejected(context, settings, claims) -> None:
    session = RelaySession(sender=lambda frame: None)
    token = _token(settings, **claims)

    with pytest.raises(AuthenticationError) as excinfo:
        authenticate_session(context, session, Handshake(auth={"token": token}))

    assert excinfo.value.reason == INVALID_TOKEN
    assert session.rooms == set()


def test_expired_or_foreign_tokens_are_rejected(context, settings) -> None:
    expired = create_access_token(
        {"userId": "user-a", "role": "USER"}, timedelta(minutes=-5), settings=settings
    )
    foreign = settings.model_copy(update={"secret_key": "another-secret"})
    forged = create_access_token({"userId": "user-a", "role": "USER"}, settings=foreign)

    for token in (expired, forged, "not-a-jwt"):
        session = RelaySession(sender=lambda frame: None)
        with pytest.raises(AuthenticationError) as excinfo:
            authenticate_session(context, session, Handshake(query={"token": token}))
        assert excinfo.value.reason == INVALID_TOKEN


@pytest.mark.anyio
async def test_reject_session_reports_then_disconnects(context) -> None:
    events: list[str] = []

    async def sender(frame):
        events.append(frame["type"])
        assert frame["data"] == {"message": "Authentication failed", "details": NO_TOKEN}

    async def disconnect() -> None:
        events.append("disconnect")

    session = RelaySession(sender=sender)

    await reject_session(context, session, AuthenticationError(NO_TOKEN), disconnect=disconnect)

    assert events == ["auth_error", "disconnect"]


def test_room_changes_require_authentication(context) -> None:
    session = RelaySession(sender=lambda frame: None)

    assert join_question_room(context, session, "q-1") is False
    assert join_user_room(context, session, "user-a") is False
    assert session.rooms == set()


def test_join_and_leave_question_room(context, connect) -> None:
    session, _ = connect("user-a")
    room = RoomAddress.question("q-1")

    assert join_question_room(context, session, "q-1") is True
    assert join_question_room(context, session, "q-1") is False
    assert context.rooms.member_count(room) == 1

    assert leave_question_room(context, session, "q-1") is True
    assert context.rooms.member_count(room) == 0
    assert join_question_room(context, session, "") is False


def test_join_user_room_accepts_any_user_id(context, connect) -> None:
    session, _ = connect("user-a")

    assert join_user_room(context, session, "user-b") is True
    assert RoomAddress.user("user-b") in session.rooms


def test_end_session_leaves_all_rooms(context, connect) -> None:
    session, _ = connect("user-a", questions=["q-1", "q-2"])

    end_session(context, session)

    assert session.rooms == set()
    assert context.rooms.member_count(RoomAddress.user("user-a")) == 0
    assert context.rooms.member_count(RoomAddress.question("q-1")) == 0
