"""Client-driven room membership changes."""

from __future__ import annotations

import logging

from relay.application.context import RelayContext
from relay.domain.entities import RoomAddress
from relay.infrastructure.realtime import RelaySession

logger = logging.getLogger(__name__)


def _can_change_rooms(session: RelaySession, target: str | None) -> bool:
    if not session.is_authenticated:
        logger.debug("Ignoring room change from unauthenticated session %s", session.id)
        return False
    return bool(target)


def join_user_room(context: RelayContext, session: RelaySession, user_id: str | None) -> bool:
    if not _can_change_rooms(session, user_id):
        return False
    return context.rooms.join(session, RoomAddress.user(user_id))


def join_question_room(
    context: RelayContext, session: RelaySession, question_id: str | None
) -> bool:
    if not _can_change_rooms(session, question_id):
        return False
    return context.rooms.join(session, RoomAddress.question(question_id))


def leave_question_room(
    context: RelayContext, session: RelaySession, question_id: str | None
) -> bool:
    if not _can_change_rooms(session, question_id):
        return False
    return context.rooms.leave(session, RoomAddress.question(question_id))


def end_session(context: RelayContext, session: RelaySession) -> None:
    """Remove a disconnected session from every room.

    Background work already spawned for the session keeps running.
    """

    context.rooms.leave_all(session)
    logger.debug("Session %s closed", session.id)


__all__ = [
    "end_session",
    "join_question_room",
    "join_user_room",
    "leave_question_room",
]
