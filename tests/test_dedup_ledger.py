"""Tests for the bounded delivery ledger."""

import pytest

from relay.infrastructure.realtime import DedupLedger


def test_mark_then_has() -> None:
    ledger = DedupLedger()

    assert not ledger.has("user-1", "n-1")
    ledger.mark("user-1", "n-1")

    assert ledger.has("user-1", "n-1")
    assert not ledger.has("user-2", "n-1")
    assert not ledger.has("user-1", "n-2")


def test_marking_twice_keeps_one_entry() -> None:
    ledger = DedupLedger()

    ledger.mark("user-1", "n-1")
    ledger.mark("user-1", "n-1")

    assert len(ledger) == 1


def test_claim_only_succeeds_once() -> None:
    ledger = DedupLedger()

    assert ledger.claim("user-1", "n-1") is True
    assert ledger.claim("user-1", "n-1") is False
    assert ledger.claim("user-2", "n-1") is True


def test_discard_allows_a_new_claim() -> None:
    ledger = DedupLedger()
    ledger.mark("user-1", "temp-1")

    ledger.discard("user-1", "temp-1")
    ledger.discard("user-1", "never-marked")

    assert not ledger.has("user-1", "temp-1")
    assert ledger.claim("user-1", "temp-1") is True


def test_exceeding_capacity_evicts_oldest_batch() -> None:
    """1001 distinct pairs leave 901 entries and the 100 oldest are gone."""

    ledger = DedupLedger()

    for index in range(1001):
        ledger.mark("user", index)

    assert len(ledger) == 901
    assert not any(ledger.has("user", index) for index in range(100))
    assert all(ledger.has("user", index) for index in range(100, 1001))


def test_capacity_is_a_high_water_mark() -> None:
    ledger = DedupLedger(capacity=5, eviction=2)

    for index in range(5):
        ledger.mark("user", index)
    assert len(ledger) == 5

    ledger.mark("user", 5)

    assert len(ledger) == 4
    assert not ledger.has("user", 0)
    assert not ledger.has("user", 1)
    assert ledger.has("user", 2)
    assert ledger.has("user", 5)


def test_evicted_pair_can_be_claimed_again() -> None:
    ledger = DedupLedger(capacity=2, eviction=1)
    ledger.mark("user", "a")
    ledger.mark("user", "b")
    ledger.mark("user", "c")

    assert ledger.claim("user", "a") is True


def test_repeated_mark_does_not_refresh_position() -> None:
    ledger = DedupLedger(capacity=3, eviction=1)
    ledger.mark("user", "a")
    ledger.mark("user", "b")
    ledger.mark("user", "c")

    ledger.mark("user", "a")
    ledger.mark("user", "d")

    assert not ledger.has("user", "a")
    assert ledger.has("user", "b")


@pytest.mark.parametrize(("capacity", "eviction"), [(0, 1), (10, 0), (10, 11)])
def test_invalid_bounds_are_rejected(capacity: int, eviction: int) -> None:
    with pytest.raises(ValueError):
        DedupLedger(capacity=capacity, eviction=eviction)
