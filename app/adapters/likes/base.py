"""Like ledger interface."""

from __future__ import annotations

from abc import ABC, abstractmethod


class AbstractLikeLedger(ABC):
    """Per-symbol like counter with one like per anonymized identity."""

    @abstractmethod
    def peek(self, symbol: str) -> int:
        """Return the current like count for ``symbol`` (0 if unseen).

        Must not mutate state.
        """
        raise NotImplementedError

    @abstractmethod
    def register_like(self, symbol: str, anonymized_ip: str) -> int:
        """Credit ``symbol`` with a like from ``anonymized_ip`` at most once.

        Args:
            symbol: Ticker symbol (case-insensitive).
            anonymized_ip: Identity key produced by the IP anonymizer.

        Returns:
            The like count after the call, unchanged if the identity had
            already liked the symbol.
        """
        raise NotImplementedError

    @abstractmethod
    def snapshot(self) -> dict[str, int]:
        """Return a copy of all like counts keyed by symbol."""
        raise NotImplementedError
