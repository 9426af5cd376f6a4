"""OHLCV bar and bar series models."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Iterator

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, model_validator


class Bar(BaseModel):
    """
    OHLCV bar data representing a single candlestick.

    Attributes:
        time: Bar timestamp (start of the period)
        open: Opening price
        high: Highest price during the period
        low: Lowest price during the period
        close: Closing price
        volume: Trading volume
    """

    time: datetime = Field(..., description="Bar timestamp")
    open: float = Field(..., description="Opening price")
    high: float = Field(..., description="Highest price")
    low: float = Field(..., description="Lowest price")
    close: float = Field(..., description="Closing price")
    volume: float = Field(default=0, description="Trading volume", ge=0)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return (
            f"Bar({self.time.isoformat()} "
            f"O:{self.open} H:{self.high} L:{self.low} C:{self.close} V:{self.volume})"
        )


class BarSeries(BaseModel):
    """
    Chronologically ordered sequence of bars (oldest first).

    All indicator functions consume a BarSeries. Construction fails if the
    bars are not in non-decreasing time order.
    """

    bars: tuple[Bar, ...] = Field(default=(), description="Bars, oldest first")

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _validate_chronological(self) -> BarSeries:
        """Ensure bar timestamps never go backwards."""
        for prev, curr in zip(self.bars, self.bars[1:]):
            if curr.time < prev.time:
                raise ValueError(
                    f"Bars must be ordered oldest to newest: {curr.time} follows {prev.time}"
                )
        return self

    @classmethod
    def from_bars(cls, bars: Iterable[Bar]) -> BarSeries:
        """Build a series from bars already in chronological order."""
        return cls(bars=tuple(bars))

    @classmethod
    def from_newest_first(cls, bars: Iterable[Bar]) -> BarSeries:
        """Build a series from a provider payload sorted newest first."""
        return cls(bars=tuple(reversed(list(bars))))

    def __len__(self) -> int:
        return len(self.bars)

    def __iter__(self) -> Iterator[Bar]:  # type: ignore[override]
        return iter(self.bars)

    def __getitem__(self, index: int) -> Bar:
        return self.bars[index]

    @property
    def closes(self) -> list[float]:
        """Closing prices, oldest first."""
        return [bar.close for bar in self.bars]

    @property
    def last(self) -> Bar | None:
        """Most recent bar, or None for an empty series."""
        return self.bars[-1] if self.bars else None

    def to_dataframe(self) -> pd.DataFrame:
        """
        Convert to a DataFrame indexed by bar time.

        Returns:
            DataFrame with float columns [open, high, low, close, volume]
        """
        columns = ["open", "high", "low", "close", "volume"]
        if not self.bars:
            return pd.DataFrame(columns=columns, dtype=float)

        df = pd.DataFrame(
            [bar.model_dump(include={"time", *columns}) for bar in self.bars]
        )
        return df.set_index("time")[columns].astype(float)
