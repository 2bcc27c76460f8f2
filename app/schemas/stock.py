"""Pydantic schemas for stock price responses."""

from __future__ import annotations

from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field


class StockData(BaseModel):
    """Quote and absolute like count for a single-symbol request."""

    stock: str = Field(..., description="Uppercase ticker symbol.")
    price: float = Field(..., ge=0, description="Latest price (0 if unavailable).")
    likes: int = Field(..., ge=0, description="Total likes recorded for the symbol.")


class RelativeStockData(BaseModel):
    """Quote and relative like count for one side of a two-symbol request."""

    stock: str = Field(..., description="Uppercase ticker symbol.")
    price: float = Field(..., ge=0, description="Latest price (0 if unavailable).")
    rel_likes: int = Field(
        ...,
        description="This symbol's likes minus the other symbol's likes.",
    )


class StockPriceResponse(BaseModel):
    """Envelope returned by ``GET /api/stock-prices``."""

    model_config = ConfigDict(populate_by_name=True)

    stock_data: Union[StockData, List[RelativeStockData]] = Field(
        ...,
        alias="stockData",
        description="One object for a single symbol, a two-element list for a pair.",
    )


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str = Field(..., description="Human-readable error message.")
