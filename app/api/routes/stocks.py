from __future__ import annotations

from typing import Annotated, List

from fastapi import APIRouter, Depends, Query, Request

from app.core.client_address import resolve_client_address
from app.schemas.stock import ErrorResponse, StockPriceResponse
from app.services.stock_service import StockPriceService

router = APIRouter(tags=["Stocks"])


def get_stock_service(request: Request) -> StockPriceService:
    """Return the service instance built by the app factory."""
    return request.app.state.stock_service


@router.get(
    "/stock-prices",
    response_model=StockPriceResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing or too many symbols"},
        502: {"model": ErrorResponse, "description": "Quote source failure"},
    },
)
async def get_stock_prices(
    request: Request,
    service: Annotated[StockPriceService, Depends(get_stock_service)],
    stock: Annotated[
        List[str] | None,
        Query(description="Ticker symbol; repeat the parameter to compare two stocks."),
    ] = None,
    like: Annotated[
        str | None,
        Query(description="Pass 'true' to like every requested stock once per client."),
    ] = None,
) -> StockPriceResponse:
    """Return current prices and like counts for one or two stocks.

    One ``stock`` yields ``{"stockData": {stock, price, likes}}``; two yield a
    list where each entry carries ``rel_likes`` instead of ``likes``. Errors
    are raised as domain exceptions and rendered by the global handlers.
    """
    return await service.get_stock_prices(
        stock,
        like=like == "true",
        client_address=resolve_client_address(request),
    )
