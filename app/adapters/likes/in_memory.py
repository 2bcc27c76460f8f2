"""In-memory like ledger.

Notes:
- Per-process only: each worker keeps its own counts, lost on restart.
- Thread-safe: the liked-set check and the increment happen under one lock.
"""

from __future__ import annotations

import logging
import threading

from app.adapters.likes.base import AbstractLikeLedger

logger = logging.getLogger(__name__)


def _normalize(symbol: str) -> str:
    return symbol.strip().upper()


class InMemoryLikeLedger(AbstractLikeLedger):
    """Like ledger backed by two dicts guarded by a lock.

    ``_counts`` maps symbol → likes and ``_liked`` maps anonymized IP → set
    of symbols it has liked. A symbol is in an identity's set if and only if
    that identity's like was counted.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._counts: dict[str, int] = {}
        self._liked: dict[str, set[str]] = {}

    def peek(self, symbol: str) -> int:
        with self._lock:
            return self._counts.get(_normalize(symbol), 0)

    def register_like(self, symbol: str, anonymized_ip: str) -> int:
        """Record a like unless this identity already liked the symbol.

        Raises:
            ValueError: If symbol is blank.
        """
        key = _normalize(symbol)
        if not key:
            raise ValueError("symbol must be a non-empty string")

        with self._lock:
            liked = self._liked.setdefault(anonymized_ip, set())
            if key in liked:
                return self._counts.get(key, 0)

            liked.add(key)
            count = self._counts.get(key, 0) + 1
            self._counts[key] = count

        logger.info("likes.registered", extra={"symbol": key, "likes": count})
        return count

    def snapshot(self) -> dict[str, int]:
        with self._lock:
            return dict(self._counts)
