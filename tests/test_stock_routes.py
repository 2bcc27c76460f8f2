"""Tests for the stock price API route.

The quote source is always a fake injected through the app factory, and
each test gets a fresh like ledger from the ``ledger`` fixture.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from app.adapters.quotes.proxy_client import ProxyQuoteSource
from app.core.config import settings
from tests.conftest import FakeQuoteSource


def test_single_stock(client: TestClient) -> None:
    response = client.get("/api/stock-prices", params={"stock": "aapl"})

    assert response.status_code == 200
    data = response.json()["stockData"]
    assert data == {"stock": "AAPL", "price": 123.45, "likes": 0}


def test_single_stock_with_like(client: TestClient) -> None:
    response = client.get("/api/stock-prices", params={"stock": "AAPL", "like": "true"})

    assert response.status_code == 200
    assert response.json()["stockData"]["likes"] == 1


def test_liking_again_from_same_client_does_not_double_count(client: TestClient) -> None:
    first = client.get("/api/stock-prices", params={"stock": "AAPL", "like": "true"})
    second = client.get("/api/stock-prices", params={"stock": "AAPL", "like": "true"})

    assert second.status_code == 200
    assert second.json()["stockData"]["likes"] == first.json()["stockData"]["likes"]


@pytest.mark.parametrize("value", ["True", "1", "yes", "false", ""])
def test_only_literal_true_registers_like(client: TestClient, value: str) -> None:
    response = client.get("/api/stock-prices", params={"stock": "AAPL", "like": value})

    assert response.status_code == 200
    assert response.json()["stockData"]["likes"] == 0


def test_two_stocks(client: TestClient) -> None:
    response = client.get("/api/stock-prices", params=[("stock", "AAPL"), ("stock", "GOOGL")])

    assert response.status_code == 200
    data = response.json()["stockData"]
    assert isinstance(data, list)
    assert len(data) == 2
    assert [item["stock"] for item in data] == ["AAPL", "GOOGL"]
    for item in data:
        assert "rel_likes" in item
        assert "likes" not in item
    assert data[0]["rel_likes"] + data[1]["rel_likes"] == 0


def test_two_stocks_relative_likes_reflect_ledger(client: TestClient, ledger) -> None:
    ledger.register_like("GOOGL", "10.0.0.0")

    response = client.get(
        "/api/stock-prices",
        params=[("stock", "AAPL"), ("stock", "GOOGL"), ("like", "true")],
    )

    data = response.json()["stockData"]
    assert [item["rel_likes"] for item in data] == [-1, 1]
    assert ledger.snapshot() == {"AAPL": 1, "GOOGL": 2}


def test_missing_stock_returns_error(client: TestClient, quote_source: FakeQuoteSource) -> None:
    response = client.get("/api/stock-prices")

    assert response.status_code == 400
    assert response.json() == {"error": "Stock symbol is required"}
    assert quote_source.calls == []


def test_three_stocks_returns_error(client: TestClient, quote_source: FakeQuoteSource) -> None:
    response = client.get(
        "/api/stock-prices",
        params=[("stock", "AAPL"), ("stock", "GOOGL"), ("stock", "MSFT")],
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Maximum of two stocks allowed"}
    assert quote_source.calls == []


def test_upstream_failure_returns_generic_error(make_client, ledger) -> None:
    client = make_client(FakeQuoteSource(failing={"GOOGL"}))

    response = client.get(
        "/api/stock-prices",
        params=[("stock", "AAPL"), ("stock", "GOOGL"), ("like", "true")],
    )

    assert response.status_code == 502
    assert response.json() == {"error": "Failed to fetch stock data"}
    assert "stockData" not in response.json()
    assert ledger.snapshot() == {}


def test_unknown_symbol_returns_zero_price(make_client) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json="Unknown symbol")

    source = ProxyQuoteSource(
        base_url="https://quotes.test",
        transport=httpx.MockTransport(handler),
    )
    client = make_client(source)

    response = client.get("/api/stock-prices", params={"stock": "zzzz"})

    assert response.status_code == 200
    assert response.json() == {"stockData": {"stock": "ZZZZ", "price": 0.0, "likes": 0}}


def test_error_statuses_are_consistent(make_client) -> None:
    client = make_client(FakeQuoteSource(failing={"AAPL"}))

    missing = client.get("/api/stock-prices")
    too_many = client.get("/api/stock-prices", params=[("stock", "A"), ("stock", "B"), ("stock", "C")])
    upstream = client.get("/api/stock-prices", params={"stock": "AAPL"})

    for response in (missing, too_many, upstream):
        assert response.status_code >= 400
        assert set(response.json()) == {"error"}
    assert missing.status_code == too_many.status_code


def test_forwarded_for_identifies_clients_when_trusted(client: TestClient, monkeypatch) -> None:
    monkeypatch.setattr(settings.app, "trust_forwarded_for", True)

    client.get(
        "/api/stock-prices",
        params={"stock": "AAPL", "like": "true"},
        headers={"X-Forwarded-For": "203.0.113.77, 10.0.0.1"},
    )
    same_subnet = client.get(
        "/api/stock-prices",
        params={"stock": "AAPL", "like": "true"},
        headers={"X-Forwarded-For": "203.0.113.12"},
    )
    other = client.get(
        "/api/stock-prices",
        params={"stock": "AAPL", "like": "true"},
        headers={"X-Forwarded-For": "198.51.100.7"},
    )

    assert same_subnet.json()["stockData"]["likes"] == 1
    assert other.json()["stockData"]["likes"] == 2


def test_forwarded_for_ignored_by_default(client: TestClient) -> None:
    client.get(
        "/api/stock-prices",
        params={"stock": "AAPL", "like": "true"},
        headers={"X-Forwarded-For": "203.0.113.77"},
    )
    response = client.get(
        "/api/stock-prices",
        params={"stock": "AAPL", "like": "true"},
        headers={"X-Forwarded-For": "198.51.100.7"},
    )

    assert response.json()["stockData"]["likes"] == 1


def test_separate_apps_have_separate_ledgers(quote_source: FakeQuoteSource) -> None:
    from app.core.app_factory import create_app

    first = TestClient(create_app(quote_source=quote_source))
    second = TestClient(create_app(quote_source=quote_source))

    first.get("/api/stock-prices", params={"stock": "AAPL", "like": "true"})
    response = second.get("/api/stock-prices", params={"stock": "AAPL"})

    assert response.json()["stockData"]["likes"] == 0


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
