"""Realtime delivery helpers for the infrastructure layer."""

from .ledger import DedupLedger
from .rooms import RelaySession, RoomRegistry, Sender
from .serializers import (
    serialize_answer,
    serialize_answer_edit,
    serialize_message,
    serialize_notification,
    serialize_optimistic_answer,
)
from .tasks import BackgroundTasks

__all__ = [
    "BackgroundTasks",
    "DedupLedger",
    "RelaySession",
    "RoomRegistry",
    "Sender",
    "serialize_answer",
    "serialize_answer_edit",
    "serialize_message",
    "serialize_notification",
    "serialize_optimistic_answer",
]
