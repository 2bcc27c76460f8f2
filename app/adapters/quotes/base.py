from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Quote:
    """Latest price for a symbol as reported by the quote source.

    Attributes:
        symbol: Uppercase ticker symbol.
        price: Latest price; 0 when the source had no price for the symbol.
    """

    symbol: str
    price: float


class AbstractQuoteSource(ABC):
    """Interface for upstream price sources."""

    @abstractmethod
    async def fetch_quote(self, symbol: str) -> Quote:
        """Fetch the latest quote for one symbol.

        Args:
            symbol: Uppercase ticker symbol.

        Returns:
            Quote: Symbol and latest price.

        Raises:
            QuoteSourceAppError: If the source is unreachable or returns a
                payload that cannot be interpreted as a quote.
        """
        ...
