"""Pytest configuration and fixtures shared across all test modules.

Environment variables are set before any app import so settings never load
a developer's .env file and never point at the real quote proxy.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ.setdefault("QUOTE_PROVIDER", "proxy")
os.environ.setdefault("QUOTE_BASE_URL", "https://quotes.test")
os.environ.setdefault("APP_TRUST_FORWARDED_FOR", "false")

from typing import Callable  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.adapters.likes import InMemoryLikeLedger  # noqa: E402
from app.adapters.quotes.base import AbstractQuoteSource, Quote  # noqa: E402
from app.core.app_factory import create_app  # noqa: E402
from app.core.errors import QuoteSourceAppError  # noqa: E402


class FakeQuoteSource(AbstractQuoteSource):
    """In-memory quote source recording every symbol it was asked for."""

    def __init__(
        self,
        prices: dict[str, float] | None = None,
        failing: set[str] | None = None,
    ) -> None:
        self.prices = prices or {"AAPL": 123.45, "GOOGL": 2500.0, "MSFT": 410.1}
        self.failing = failing or set()
        self.calls: list[str] = []

    async def fetch_quote(self, symbol: str) -> Quote:
        self.calls.append(symbol)
        if symbol in self.failing:
            raise QuoteSourceAppError(
                code="upstream_fetch_failed",
                message="Failed to fetch stock data",
                details={"symbol": symbol},
            )
        return Quote(symbol=symbol, price=self.prices.get(symbol, 0))


@pytest.fixture
def quote_source() -> FakeQuoteSource:
    return FakeQuoteSource()


@pytest.fixture
def ledger() -> InMemoryLikeLedger:
    return InMemoryLikeLedger()


@pytest.fixture
def make_client(ledger: InMemoryLikeLedger) -> Callable[[AbstractQuoteSource], TestClient]:
    """Build a TestClient around a fresh app using the given quote source."""

    def _make(source: AbstractQuoteSource) -> TestClient:
        return TestClient(create_app(quote_source=source, ledger=ledger))

    return _make


@pytest.fixture
def client(make_client, quote_source: FakeQuoteSource) -> TestClient:
    return make_client(quote_source)
