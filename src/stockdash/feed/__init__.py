"""Simulated real-time market data feed."""

from stockdash.feed.mock import (
    QuoteSource,
    RandomQuoteSource,
    Subscription,
    subscribe_to_realtime_data,
)

__all__ = [
    "QuoteSource",
    "RandomQuoteSource",
    "Subscription",
    "subscribe_to_realtime_data",
]
