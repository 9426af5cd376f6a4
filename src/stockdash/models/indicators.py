"""Technical indicator result models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MACDResult(BaseModel):
    """MACD line, signal line and histogram, rounded to 2 decimals."""

    macd: float = Field(..., description="EMA(12) - EMA(26)")
    signal: float = Field(..., description="EMA(9) signal line")
    histogram: float = Field(..., description="macd - signal")

    model_config = ConfigDict(frozen=True)


class BollingerBands(BaseModel):
    """Bollinger envelope around the moving average, rounded to 2 decimals."""

    middle: float = Field(..., description="Moving average")
    upper: float = Field(..., description="middle + k * stddev")
    lower: float = Field(..., description="middle - k * stddev")

    model_config = ConfigDict(frozen=True)


class TechnicalIndicators(BaseModel):
    """
    Indicator snapshot for one bar series.

    Indicators that lacked enough bars are None.

    Attributes:
        rsi: RSI(14)
        macd: MACD(12, 26, 9)
        bollinger: Bollinger(20, 2)
        last_price: Close of the most recent bar
        last_volume: Volume of the most recent bar
        summary: Categorical hints derived from the values above
    """

    rsi: Optional[float] = Field(default=None, description="RSI(14)")
    macd: Optional[MACDResult] = Field(default=None, description="MACD(12, 26, 9)")
    bollinger: Optional[BollingerBands] = Field(default=None, description="Bollinger(20, 2)")
    last_price: float = Field(..., description="Most recent close")
    last_volume: float = Field(..., description="Most recent volume")
    summary: list[str] = Field(default_factory=list, description="Summary hints")

    model_config = ConfigDict(frozen=True)
