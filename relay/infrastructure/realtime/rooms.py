"""Room membership tracking and broadcast helpers for relay sessions."""

from __future__ import annotations

import copy
import logging
from collections import defaultdict
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, DefaultDict
from uuid import uuid4

from relay.domain.entities import Identity, RoomAddress

logger = logging.getLogger(__name__)

Sender = Callable[[dict[str, Any]], Awaitable[None]]


@dataclass(eq=False)
class RelaySession:
    """State of one live connection: who it is and which rooms it joined."""

    sender: Sender
    id: str = field(default_factory=lambda: uuid4().hex)
    identity: Identity | None = None
    rooms: set[RoomAddress] = field(default_factory=set)

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None

    async def send(self, event: str, data: Any) -> None:
        """Send a single ``event`` frame to this connection only."""

        await self.sender({"type": event, "data": data})


class RoomRegistry:
    """Manage live sessions grouped by room address."""

    def __init__(self) -> None:
        self._rooms: DefaultDict[RoomAddress, dict[str, RelaySession]] = defaultdict(dict)

    def join(self, session: RelaySession, room: RoomAddress) -> bool:
        """Add ``session`` to ``room``. Returns ``False`` when already a member."""

        members = self._rooms[room]
        if session.id in members:
            return False
        members[session.id] = session
        session.rooms.add(room)
        logger.debug("Session %s joined %s", session.id, room)
        return True

    def leave(self, session: RelaySession, room: RoomAddress) -> bool:
        """Remove ``session`` from ``room``. Returns ``False`` when not a member."""

        session.rooms.discard(room)
        members = self._rooms.get(room)
        if not members or members.pop(session.id, None) is None:
            return False
        if not members:
            self._rooms.pop(room, None)
        logger.debug("Session %s left %s", session.id, room)
        return True

    def leave_all(self, session: RelaySession) -> None:
        """Drop ``session`` from every room it belongs to."""

        for room in list(session.rooms):
            self.leave(session, room)

    def members(self, room: RoomAddress) -> list[RelaySession]:
        return list(self._rooms.get(room, {}).values())

    def member_count(self, room: RoomAddress) -> int:
        return len(self._rooms.get(room, {}))

    async def emit(self, room: RoomAddress, event: str, data: Any) -> int:
        """Send ``event`` to every session in ``room``.

        Sessions whose transport fails are removed from all rooms. Returns the
        number of sessions the frame was delivered to.
        """

        sessions = self.members(room)
        if not sessions:
            logger.debug("Room %s has no members, skipping %s", room, event)
            return 0

        payload = copy.deepcopy(data)
        delivered = 0
        for session in sessions:
            try:
                await session.send(event, payload)
            except Exception as exc:  # pragma: no cover - network stack
                logger.warning(
                    "Failed to send %s to session %s in %s: %s", event, session.id, room, exc
                )
                self.leave_all(session)
                continue
            delivered += 1
        return delivered

    async def emit_to_rooms(
        self, rooms: Iterable[RoomAddress], event: str, data: Any
    ) -> None:
        """Emit ``event`` to each room in turn."""

        for room in rooms:
            await self.emit(room, event, data)


__all__ = ["RelaySession", "RoomRegistry", "Sender"]
