"""Quote source backed by the stock price checker proxy.

The proxy serves ``GET /v1/stock/{SYMBOL}/quote`` with an IEX-style payload
(``symbol``, ``latestPrice`` and many other fields). Unknown symbols come
back as a bare JSON string such as ``"Unknown symbol"``.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from app.adapters.quotes.base import AbstractQuoteSource, Quote
from app.core.errors import QuoteSourceAppError

logger = logging.getLogger(__name__)


def _fetch_failed(symbol: str, **details: Any) -> QuoteSourceAppError:
    return QuoteSourceAppError(
        code="upstream_fetch_failed",
        message="Failed to fetch stock data",
        details={"symbol": symbol, **details},
    )


def parse_quote(symbol: str, payload: Any) -> Quote:
    """Turn a decoded proxy payload into a Quote.

    Missing ``symbol`` falls back to the requested symbol and a missing or
    null ``latestPrice`` falls back to 0. A payload that is not an object
    (``"Unknown symbol"``, null, a list) carries neither field and yields a
    zero-priced quote for the requested symbol.

    Raises:
        QuoteSourceAppError: If the price is not a non-negative number.
    """
    if not isinstance(payload, dict):
        logger.info("quote.no_data", extra={"symbol": symbol})
        payload = {}

    price = payload.get("latestPrice")
    if price is None:
        price = 0
    if isinstance(price, bool) or not isinstance(price, (int, float)) or price < 0:
        raise _fetch_failed(symbol, error_type="invalid_price")

    quoted_symbol = payload.get("symbol")
    if not isinstance(quoted_symbol, str) or not quoted_symbol.strip():
        quoted_symbol = symbol

    return Quote(symbol=quoted_symbol.strip().upper(), price=price)


class ProxyQuoteSource(AbstractQuoteSource):
    """Fetch quotes over HTTP with ``httpx.AsyncClient``."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 8.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the proxy client.

        Args:
            base_url: Proxy root URL (without ``/v1``).
            timeout_seconds: Timeout applied to each request.
            transport: Optional transport override (tests use MockTransport).
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout_seconds
        self._transport = transport

    async def fetch_quote(self, symbol: str) -> Quote:
        url = f"/v1/stock/{symbol}/quote"
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "quote.http_error",
                extra={"symbol": symbol, "status_code": exc.response.status_code},
            )
            raise _fetch_failed(
                symbol, status_code=exc.response.status_code
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning(
                "quote.transport_error",
                extra={"symbol": symbol, "error_type": type(exc).__name__},
            )
            raise _fetch_failed(symbol, error_type=type(exc).__name__) from exc
        except ValueError as exc:
            # response.json() raises a ValueError subclass on invalid JSON
            logger.warning("quote.invalid_json", extra={"symbol": symbol})
            raise _fetch_failed(symbol, error_type="invalid_json") from exc

        return parse_quote(symbol, payload)
