"""Notification fan-out for newly persisted content."""

from .fanout import (
    NotificationTrigger,
    answer_trigger,
    compute_recipients,
    deliver_to_recipient,
    dispatch_notifications,
    message_trigger,
    push_to_recipient,
    resolve_recipients,
)

__all__ = [
    "NotificationTrigger",
    "answer_trigger",
    "compute_recipients",
    "deliver_to_recipient",
    "dispatch_notifications",
    "message_trigger",
    "push_to_recipient",
    "resolve_recipients",
]
