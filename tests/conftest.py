"""Test configuration and fixtures for pytest."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, Sequence

import pytest

from stockdash.models.bar import Bar, BarSeries
from stockdash.models.quote import Quote

START = datetime(2024, 1, 2, 14, 30, tzinfo=timezone.utc)


def build_series(closes: Sequence[float], volume: float = 1000) -> BarSeries:
    """Hourly bars with the given closes, oldest first."""
    return BarSeries.from_bars(
        Bar(
            time=START + timedelta(hours=i),
            open=close,
            high=close,
            low=close,
            close=close,
            volume=volume,
        )
        for i, close in enumerate(closes)
    )


@pytest.fixture
def make_series() -> Callable[..., BarSeries]:
    """Factory for bar series built from closing prices."""
    return build_series


@pytest.fixture
def sample_quote() -> Quote:
    """A quote for AAPL up 2%."""
    return Quote(
        symbol="AAPL",
        price=102.0,
        change=2.0,
        change_percent=2.0,
        volume=1_234_567,
        timestamp=START,
    )
