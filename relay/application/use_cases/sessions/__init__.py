"""Connection lifecycle: authentication and room membership."""

from .authenticate_session import (
    INVALID_TOKEN,
    NO_TOKEN,
    AuthenticationError,
    Handshake,
    authenticate_session,
    extract_credential,
    reject_session,
)
from .room_membership import (
    end_session,
    join_question_room,
    join_user_room,
    leave_question_room,
)

__all__ = [
    "AuthenticationError",
    "Handshake",
    "INVALID_TOKEN",
    "NO_TOKEN",
    "authenticate_session",
    "extract_credential",
    "reject_session",
    "end_session",
    "join_question_room",
    "join_user_room",
    "leave_question_room",
]
