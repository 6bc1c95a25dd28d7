"""Pydantic schemas used by the transport layer."""

from .events import AnswerSendPayload, AnswerUpdatePayload, MessageSendPayload
from .health import HealthRead

__all__ = [
    "AnswerSendPayload",
    "AnswerUpdatePayload",
    "MessageSendPayload",
    "HealthRead",
]
