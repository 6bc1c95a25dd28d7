"""Fan-out of content notifications to question owners and watchers."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from relay.application.context import RelayContext
from relay.domain.entities import (
    NOTIFICATION_TYPE_ANSWER_CREATED,
    NOTIFICATION_TYPE_MESSAGE_CREATED,
    Answer,
    Notification,
    Question,
    QuestionMessage,
    RoomAddress,
)
from relay.infrastructure.push import PushMessage
from relay.infrastructure.realtime import serialize_notification
from relay.utils import utc_now

logger = logging.getLogger(__name__)


@dataclass
class NotificationTrigger:
    """A persisted content item that recipients should hear about."""

    type: str
    question: Question
    item_id: str
    actor_id: str
    title: str
    content: str
    link: str
    meta: dict[str, Any] = field(default_factory=dict)

    def build_notification(self, recipient_id: str) -> Notification:
        return Notification(
            id=None,
            user_id=recipient_id,
            type=self.type,
            title=self.title,
            content=self.content,
            link=self.link,
            meta=dict(self.meta),
            question_id=self.question.id,
            answer_id=self.item_id,
            created_at=utc_now(),
        )

    def build_push(self) -> PushMessage:
        return PushMessage(
            title=self.title,
            body=self.question.title,
            data={"questionId": self.question.id, **self.meta},
            link=self.link,
        )


def answer_trigger(question: Question, answer: Answer, *, actor_id: str) -> NotificationTrigger:
    link = f"/questions/{question.id}#answer-{answer.id}"
    return NotificationTrigger(
        type=NOTIFICATION_TYPE_ANSWER_CREATED,
        question=question,
        item_id=answer.id or "",
        actor_id=actor_id,
        title="New answer",
        content=f'Question "{question.title}" has a new answer.',
        link=link,
        meta={"questionId": question.id, "answerId": answer.id},
    )


def message_trigger(
    question: Question, message: QuestionMessage, *, actor_id: str
) -> NotificationTrigger:
    link = f"/questions/{question.id}#message-{message.id}"
    return NotificationTrigger(
        type=NOTIFICATION_TYPE_MESSAGE_CREATED,
        question=question,
        item_id=message.id or "",
        actor_id=actor_id,
        title="New message",
        content=f'Question "{question.title}" has a new message.',
        link=link,
        meta={"questionId": question.id, "messageId": message.id},
    )


def compute_recipients(
    *, owner_id: str | None, actor_id: str, watcher_ids: Iterable[str]
) -> list[str]:
    """Return the owner (unless acting) followed by distinct other watchers."""

    recipients: list[str] = []
    if owner_id and owner_id != actor_id:
        recipients.append(owner_id)
    for watcher_id in watcher_ids:
        if not watcher_id or watcher_id in (actor_id, owner_id):
            continue
        if watcher_id not in recipients:
            recipients.append(watcher_id)
    return recipients


async def resolve_recipients(context: RelayContext, question: Question, *, actor_id: str) -> list[str]:
    watcher_ids = await context.store.list_watcher_ids(question.id, exclude_user_id=actor_id)
    return compute_recipients(
        owner_id=question.author_id, actor_id=actor_id, watcher_ids=watcher_ids
    )


async def dispatch_notifications(
    context: RelayContext,
    trigger: NotificationTrigger,
    *,
    recipients: Iterable[str] | None = None,
) -> dict[str, bool]:
    """Create and deliver one notification per recipient.

    Recipients are handled concurrently and independently. The result maps
    each recipient to whether this call delivered the notification; failures
    and ledger skips map to ``False``.
    """

    if recipients is None:
        try:
            recipients = await resolve_recipients(context, trigger.question, actor_id=trigger.actor_id)
        except Exception:
            logger.exception(
                "Failed to resolve notification recipients for question %s", trigger.question.id
            )
            return {}

    targets = list(dict.fromkeys(recipients))
    if not targets:
        return {}

    results = await asyncio.gather(
        *(deliver_to_recipient(context, trigger, recipient_id) for recipient_id in targets),
        return_exceptions=True,
    )

    outcome: dict[str, bool] = {}
    for recipient_id, result in zip(targets, results):
        if isinstance(result, BaseException):
            logger.error(
                "Failed to create/send %s notification to user %s: %s",
                trigger.type,
                recipient_id,
                result,
                exc_info=result,
            )
            outcome[recipient_id] = False
        else:
            outcome[recipient_id] = result
    return outcome


async def deliver_to_recipient(
    context: RelayContext, trigger: NotificationTrigger, recipient_id: str
) -> bool:
    """Reuse or create the recipient's notification, then deliver it once."""

    notification, created = await context.store.get_or_create_notification(
        trigger.build_notification(recipient_id)
    )
    if not created:
        logger.debug("Reusing notification %s for user %s", notification.id, recipient_id)

    if not context.notification_ledger.claim(recipient_id, notification.id):
        logger.info(
            "Notification %s already emitted to user %s, skipping", notification.id, recipient_id
        )
        return False

    await context.rooms.emit(
        RoomAddress.user(recipient_id), "notification:new", serialize_notification(notification)
    )
    await push_to_recipient(context, trigger, recipient_id)
    return True


async def push_to_recipient(
    context: RelayContext, trigger: NotificationTrigger, recipient_id: str
) -> int:
    """Send the push message to each active token; returns the number accepted."""

    try:
        tokens = await context.store.list_push_tokens(recipient_id)
    except Exception:
        logger.exception("Push token lookup failed for user %s", recipient_id)
        return 0
    if not tokens:
        return 0

    message = trigger.build_push()
    results = await asyncio.gather(
        *(context.push.send(message, token=token.fcm_token) for token in tokens),
        return_exceptions=True,
    )

    accepted = 0
    for token, result in zip(tokens, results):
        if isinstance(result, BaseException):
            logger.warning(
                "Push send failed for user %s (token %s): %s", recipient_id, token.id, result
            )
        elif result:
            accepted += 1
    return accepted


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
