"""Bounded, insertion-ordered set of already-handled keys."""

from __future__ import annotations

import logging
from collections.abc import Hashable

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 1000
DEFAULT_EVICTION = 100


class DedupLedger:
    """Remember which (owner, item) pairs were handled in this process.

    Once more than ``capacity`` entries are stored, the ``eviction`` oldest
    entries by insertion order are dropped in one pass. This is not an LRU:
    an evicted pair can be handled again, which trades a rare duplicate for
    bounded memory.
    """

    def __init__(
        self, capacity: int = DEFAULT_CAPACITY, eviction: int = DEFAULT_EVICTION
    ) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        if not 0 < eviction <= capacity:
            raise ValueError("eviction must be between 1 and capacity")
        self.capacity = capacity
        self.eviction = eviction
        self._entries: dict[tuple[Hashable, Hashable], None] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def has(self, owner: Hashable, item: Hashable) -> bool:
        return (owner, item) in self._entries

    def mark(self, owner: Hashable, item: Hashable) -> None:
        key = (owner, item)
        if key in self._entries:
            return
        self._entries[key] = None
        if len(self._entries) > self.capacity:
            self._evict()

    def claim(self, owner: Hashable, item: Hashable) -> bool:
        """Mark the pair and return ``True`` unless it was already present.

        No await happens between the check and the insert, so concurrent
        coroutines on the same loop cannot both claim a pair.
        """

        if self.has(owner, item):
            return False
        self.mark(owner, item)
        return True

    def discard(self, owner: Hashable, item: Hashable) -> None:
        self._entries.pop((owner, item), None)

    def _evict(self) -> None:
        oldest = list(self._entries)[: self.eviction]
        for key in oldest:
            del self._entries[key]
        logger.debug("Evicted %d ledger entries; %d remain", len(oldest), len(self._entries))


__all__ = ["DEFAULT_CAPACITY", "DEFAULT_EVICTION", "DedupLedger"]
