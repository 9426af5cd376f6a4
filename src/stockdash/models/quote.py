"""Quote and ticker lookup models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Quote(BaseModel):
    """
    Point-in-time price snapshot for a symbol.

    Attributes:
        symbol: Ticker symbol (e.g., "AAPL")
        price: Last traded price
        change: Absolute change versus the reference price
        change_percent: Percentage change versus the reference price
        volume: Traded volume
        timestamp: Time of the snapshot
    """

    symbol: str = Field(..., description="Ticker symbol")
    price: float = Field(..., description="Last price")
    change: float = Field(default=0.0, description="Absolute change")
    change_percent: float = Field(default=0.0, description="Percent change")
    volume: float = Field(default=0, description="Traded volume", ge=0)
    timestamp: datetime = Field(..., description="Snapshot time")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        sign = "+" if self.change >= 0 else ""
        return (
            f"{self.symbol} {self.price:.2f} "
            f"{sign}{self.change:.2f} ({sign}{self.change_percent:.2f}%)"
        )


class TickerMatch(BaseModel):
    """A ticker search hit."""

    symbol: str
    name: str
    exchange: str = ""

    model_config = ConfigDict(frozen=True)
