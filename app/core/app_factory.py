"""Application factory for the FastAPI app.

Builds the app and its process-wide collaborators (quote source, like
ledger, stock price service). Tests pass their own collaborators to get an
isolated ledger and a stubbed quote source per app instance.
"""

from __future__ import annotations

from fastapi import FastAPI

from app.adapters.likes import AbstractLikeLedger, InMemoryLikeLedger
from app.adapters.quotes import AbstractQuoteSource, create_quote_source
from app.api.routes import health_router, stocks_router
from app.core.exception_handlers import setup_exception_handlers
from app.core.logging import configure_logging
from app.core.middleware import request_id_middleware
from app.services.stock_service import StockPriceService


def create_app(
    *,
    quote_source: AbstractQuoteSource | None = None,
    ledger: AbstractLikeLedger | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Args:
        quote_source: Quote source override; defaults to the configured provider.
        ledger: Like ledger override; defaults to a fresh in-memory ledger.

    Returns:
        Configured FastAPI app with middleware, handlers and routers.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging()

    app = FastAPI(
        title="Stock Price Checker API",
        description=(
            "Current stock prices for one or two symbols, with one anonymized "
            "like per client and symbol."
        ),
        version="0.1.0",
    )

    app.state.ledger = ledger or InMemoryLikeLedger()
    app.state.stock_service = StockPriceService(
        quotes=quote_source or create_quote_source(),
        ledger=app.state.ledger,
    )

    app.middleware("http")(request_id_middleware)

    setup_exception_handlers(app)

    app.include_router(stocks_router, prefix="/api")
    app.include_router(health_router)

    return app
