"""Process-scoped state shared by every relay handler."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

from relay.config import Settings
from relay.domain.entities import Identity
from relay.infrastructure.push import FcmPushClient, PushMessage
from relay.infrastructure.realtime import BackgroundTasks, DedupLedger, RoomRegistry
from relay.infrastructure.security import TokenIdentityResolver
from relay.infrastructure.store import RelayStore

logger = logging.getLogger(__name__)


class IdentityResolver(Protocol):
    def resolve(self, credential: str) -> Identity | None: ...


class PushSender(Protocol):
    async def send(
        self, message: PushMessage, *, token: str | None = None, topic: str | None = None
    ) -> bool: ...

    async def aclose(self) -> None: ...


@dataclass
class RelayContext:
    """Collaborators and in-memory tables handed to each handler explicitly.

    Ledgers and room membership live in this process only; running several
    instances needs sticky clients or a shared store behind these objects.
    """

    settings: Settings
    store: RelayStore
    push: PushSender
    identity_resolver: IdentityResolver
    rooms: RoomRegistry = field(default_factory=RoomRegistry)
    notification_ledger: DedupLedger = field(default_factory=DedupLedger)
    submission_ledger: DedupLedger = field(default_factory=DedupLedger)
    edit_ledger: DedupLedger = field(default_factory=DedupLedger)
    tasks: BackgroundTasks = field(default_factory=BackgroundTasks)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        store: RelayStore | None = None,
        push: PushSender | None = None,
        identity_resolver: IdentityResolver | None = None,
    ) -> "RelayContext":
        return cls(
            settings=settings,
            store=store or RelayStore(),
            push=push or FcmPushClient(settings),
            identity_resolver=identity_resolver or TokenIdentityResolver(settings),
            notification_ledger=DedupLedger(
                settings.dedup_ledger_capacity, settings.dedup_ledger_eviction
            ),
            submission_ledger=DedupLedger(
                settings.dedup_ledger_capacity, settings.dedup_ledger_eviction
            ),
            edit_ledger=DedupLedger(
                settings.dedup_ledger_capacity, settings.dedup_ledger_eviction
            ),
        )

    async def aclose(self) -> None:
        """Let in-flight work finish, then release the push transport."""

        drained = await self.tasks.drain(timeout=self.settings.shutdown_drain_seconds)
        if not drained:
            logger.warning("Shutting down with %d relay tasks still pending", len(self.tasks))
        await self.push.aclose()


__all__ = ["IdentityResolver", "PushSender", "RelayContext"]
