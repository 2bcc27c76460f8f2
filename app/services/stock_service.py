"""Stock price service: quotes plus like counts for one or two symbols.

This is the request-level orchestrator behind ``GET /api/stock-prices``. It:
- Validates and normalizes the requested symbols
- Fetches all quotes concurrently, failing the whole request on the first error
- Registers or reads likes through the injected like ledger
- Shapes the response (absolute likes for one symbol, relative for two)
"""

from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from app.adapters.likes.base import AbstractLikeLedger
from app.adapters.quotes.base import AbstractQuoteSource, Quote
from app.core.errors import AppError, QuoteSourceAppError, ValidationAppError
from app.schemas.stock import RelativeStockData, StockData, StockPriceResponse
from app.services.ip_anonymizer import anonymize

logger = logging.getLogger(__name__)

MAX_SYMBOLS = 2


def normalize_symbols(symbols: Sequence[str] | None) -> list[str]:
    """Strip, uppercase and validate the requested symbols.

    Args:
        symbols: Raw ``stock`` query values, possibly None.

    Returns:
        One or two uppercase symbols, in request order.

    Raises:
        ValidationAppError: If no symbol is given or more than two are.
    """
    raw = list(symbols or [])
    if len(raw) > MAX_SYMBOLS:
        raise ValidationAppError(
            code="too_many_symbols",
            message="Maximum of two stocks allowed",
            details={"max_symbols": MAX_SYMBOLS, "actual_value": len(raw)},
        )

    normalized = [s.strip().upper() for s in raw if s and s.strip()]
    if not normalized or len(normalized) != len(raw):
        raise ValidationAppError(
            code="missing_symbol",
            message="Stock symbol is required",
        )
    return normalized


def relative_likes(likes: Sequence[int]) -> list[int]:
    """Return each count minus the other one for a pair of counts."""
    first, second = likes
    return [first - second, second - first]


class StockPriceService:
    """Answers stock price requests using a quote source and a like ledger.

    Attributes:
        quotes: Upstream quote source.
        ledger: Process-wide like ledger shared by all requests.
    """

    def __init__(self, quotes: AbstractQuoteSource, ledger: AbstractLikeLedger) -> None:
        self.quotes = quotes
        self.ledger = ledger

    async def _fetch_one(self, symbol: str) -> Quote:
        try:
            return await self.quotes.fetch_quote(symbol)
        except AppError:
            raise
        except Exception as exc:
            raise QuoteSourceAppError(
                code="upstream_fetch_failed",
                message="Failed to fetch stock data",
                details={"symbol": symbol, "error_type": type(exc).__name__},
            ) from exc

    async def _fetch_all(self, symbols: Sequence[str]) -> list[Quote]:
        """Fetch quotes concurrently; the first failure cancels the rest.

        Raises:
            QuoteSourceAppError: If any fetch fails.
        """
        tasks = [asyncio.create_task(self._fetch_one(s)) for s in symbols]
        try:
            done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        except asyncio.CancelledError:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

        errors = [t.exception() for t in tasks if t in done and t.exception() is not None]
        if errors:
            exc = errors[0]
            logger.error(
                "quote.fetch_failed",
                extra={
                    "symbols": list(symbols),
                    "error_code": getattr(exc, "code", None),
                    "error_details": getattr(exc, "details", None) or {},
                },
            )
            raise exc

        return [task.result() for task in tasks]

    def _likes_for(self, symbol: str, like: bool, anonymized_ip: str) -> int:
        if like:
            return self.ledger.register_like(symbol, anonymized_ip)
        return self.ledger.peek(symbol)

    async def get_stock_prices(
        self,
        symbols: Sequence[str] | None,
        *,
        like: bool = False,
        client_address: str | None = None,
    ) -> StockPriceResponse:
        """Build the stock price response for one or two symbols.

        Args:
            symbols: Requested ticker symbols (case-insensitive).
            like: Whether to register a like for every requested symbol.
            client_address: Raw client address; anonymized before use.

        Returns:
            StockPriceResponse with ``StockData`` for one symbol or a list of
            two ``RelativeStockData`` for a pair.

        Raises:
            ValidationAppError: Missing or too many symbols.
            QuoteSourceAppError: Any quote fetch failed.
        """
        # Step 1: Validate before touching the network
        normalized = normalize_symbols(symbols)

        # Step 2: Fetch quotes, all or nothing
        quotes = await self._fetch_all(normalized)

        # Step 3: Likes are keyed by the requested symbol
        anonymized_ip = anonymize(client_address) if like else ""
        likes = [self._likes_for(symbol, like, anonymized_ip) for symbol in normalized]

        # Step 4: Shape the response
        if len(quotes) == 1:
            quote = quotes[0]
            return StockPriceResponse(
                stock_data=StockData(stock=quote.symbol, price=quote.price, likes=likes[0])
            )

        return StockPriceResponse(
            stock_data=[
                RelativeStockData(stock=quote.symbol, price=quote.price, rel_likes=rel)
                for quote, rel in zip(quotes, relative_likes(likes))
            ]
        )
