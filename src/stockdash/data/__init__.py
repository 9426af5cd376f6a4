"""Market data clients."""

from stockdash.data.marketstack import (
    MarketstackClient,
    lookback_range,
    period_to_interval,
)

__all__ = [
    "MarketstackClient",
    "lookback_range",
    "period_to_interval",
]
