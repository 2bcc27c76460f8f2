"""Unit tests for the in-memory like ledger."""

import threading

import pytest

from app.adapters.likes import InMemoryLikeLedger


def test_unseen_symbol_has_zero_likes() -> None:
    ledger = InMemoryLikeLedger()

    assert ledger.peek("AAPL") == 0
    assert ledger.snapshot() == {}


def test_peek_does_not_mutate() -> None:
    ledger = InMemoryLikeLedger()

    ledger.peek("AAPL")
    ledger.peek("AAPL")

    assert ledger.snapshot() == {}


def test_repeated_like_from_same_identity_counts_once() -> None:
    ledger = InMemoryLikeLedger()
    before = ledger.peek("AAPL")

    first = ledger.register_like("AAPL", "203.0.113.0")
    second = ledger.register_like("AAPL", "203.0.113.0")

    assert first == second == before + 1
    assert ledger.peek("AAPL") == before + 1


def test_distinct_identities_each_count() -> None:
    ledger = InMemoryLikeLedger()

    ledger.register_like("AAPL", "203.0.113.0")
    ledger.register_like("AAPL", "198.51.100.0")

    assert ledger.peek("AAPL") == 2


def test_symbols_are_case_insensitive() -> None:
    ledger = InMemoryLikeLedger()

    assert ledger.register_like("aapl", "203.0.113.0") == 1
    assert ledger.register_like("AAPL", "203.0.113.0") == 1
    assert ledger.peek("Aapl") == 1
    assert ledger.snapshot() == {"AAPL": 1}


def test_likes_are_tracked_per_symbol() -> None:
    ledger = InMemoryLikeLedger()

    ledger.register_like("AAPL", "203.0.113.0")
    ledger.register_like("GOOGL", "203.0.113.0")

    assert ledger.snapshot() == {"AAPL": 1, "GOOGL": 1}


def test_blank_symbol_rejected() -> None:
    ledger = InMemoryLikeLedger()

    with pytest.raises(ValueError):
        ledger.register_like("  ", "203.0.113.0")


def test_concurrent_likes_from_same_identity_count_once() -> None:
    ledger = InMemoryLikeLedger()
    barrier = threading.Barrier(16)
    results: list[int] = []

    def worker() -> None:
        barrier.wait()
        results.append(ledger.register_like("AAPL", "203.0.113.0"))

    threads = [threading.Thread(target=worker) for _ in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert ledger.peek("AAPL") == 1
    assert set(results) == {1}


def test_concurrent_likes_from_distinct_identities_all_count() -> None:
    ledger = InMemoryLikeLedger()
    barrier = threading.Barrier(20)

    def worker(i: int) -> None:
        barrier.wait()
        ledger.register_like("MSFT", f"10.0.{i}.0")

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert ledger.peek("MSFT") == 20
