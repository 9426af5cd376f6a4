"""marketstack REST client for quotes, intraday bars and end-of-day history."""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Any, Optional

import requests

from stockdash.core.errors import MarketDataError
from stockdash.models.bar import Bar, BarSeries
from stockdash.models.config import MarketstackConfig
from stockdash.models.quote import Quote, TickerMatch

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://api.marketstack.com/v1"

PERIOD_INTERVALS: dict[str, str] = {
    "1d": "1h",
    "1w": "3h",
    "1M": "6h",
}
"""Dashboard chart period -> intraday bar interval."""

DEFAULT_INTERVAL = "1h"
EOD_LIMIT = 30


def period_to_interval(period: str) -> str:
    """Convert a chart period to an intraday interval, defaulting to hourly bars."""
    return PERIOD_INTERVALS.get(period, DEFAULT_INTERVAL)


def lookback_range(period: str, count: int) -> str:
    """Calendar-day range needed to cover ``count`` bars of ``period``.

    Weekly and monthly periods are scaled by trading days (5 per week,
    21 per month). The client requests bars by ``limit`` and does not call
    this itself; it is public API for callers that size a date window.
    """
    if period == "1d":
        return f"{count}d"
    if period == "1w":
        return f"{math.ceil(count * 7 / 5)}d"
    if period == "1M":
        return f"{math.ceil(count * 30 / 21)}d"
    return "1y"


def _parse_timestamp(value: Any) -> datetime:
    """Parse marketstack dates such as ``2024-01-05T00:00:00+0000``."""
    if isinstance(value, datetime):
        return value
    text = str(value)
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return datetime.strptime(text, "%Y-%m-%dT%H:%M:%S%z")


def _parse_bar(raw: dict[str, Any]) -> Bar:
    return Bar(
        time=_parse_timestamp(raw["date"]),
        open=raw["open"],
        high=raw["high"],
        low=raw["low"],
        close=raw["close"],
        volume=raw.get("volume") or 0,
    )


class MarketstackClient:
    """
    Fetches quotes and OHLCV bars from a marketstack-compatible API.

    Every call is a single blocking request with no retries. Transport
    errors, HTTP errors and empty payloads are logged and raised as
    ``MarketDataError``.

    Attributes:
        base_url: API root URL
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            api_key: marketstack access key, sent as the ``access_key`` parameter
            base_url: API root URL
            timeout: Request timeout in seconds
            session: Optional pre-built session (for connection reuse or tests)
        """
        self._api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    @classmethod
    def from_config(
        cls,
        config: MarketstackConfig,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> MarketstackClient:
        """Build a client from configuration, reading the key from the environment."""
        key = api_key or config.get_api_key()
        if not key:
            raise ValueError(f"{config.api_key_env} not set in environment")
        return cls(key, base_url=config.base_url, timeout=config.timeout, session=session)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def search_tickers(self, query: str, limit: int = 10) -> list[TickerMatch]:
        """
        Search tickers by symbol or company name.

        Returns:
            Matching tickers; empty if the provider returned no data
        """
        try:
            payload = self._get("/tickers", {"search": query, "limit": limit})
            records = payload.get("data") or []
            return [
                TickerMatch(
                    symbol=item["symbol"],
                    name=item.get("name") or "",
                    exchange=(item.get("stock_exchange") or {}).get("acronym") or "",
                )
                for item in records
            ]
        except MarketDataError as e:
            logger.error(f"Search stock error for {query!r}: {e}")
            raise
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Search stock error for {query!r}: {e}")
            raise MarketDataError(f"Malformed ticker payload for {query!r}: {e}") from e

    def get_realtime_quote(self, symbol: str) -> Quote:
        """
        Fetch the latest intraday quote.

        Change is measured from the latest bar's open to its close.

        Raises:
            MarketDataError: If the request fails or no quote is returned
        """
        try:
            payload = self._get("/intraday/latest", {"symbols": symbol})
            records = payload.get("data") or []
            if not records:
                raise MarketDataError(f"No quote data found for {symbol}")

            raw = records[0]
            open_price = float(raw["open"])
            close = float(raw["close"])
            change = close - open_price
            change_percent = round(change / open_price * 100, 2) if open_price else 0.0
            return Quote(
                symbol=raw.get("symbol") or symbol,
                price=close,
                change=change,
                change_percent=change_percent,
                volume=raw.get("volume") or 0,
                timestamp=_parse_timestamp(raw["date"]),
            )
        except MarketDataError as e:
            logger.error(f"Get realtime quote error for {symbol}: {e}")
            raise
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Get realtime quote error for {symbol}: {e}")
            raise MarketDataError(f"Malformed quote payload for {symbol}: {e}") from e

    def get_intraday_bars(
        self,
        symbol: str,
        period: str = "1d",
        count: int = 100,
    ) -> BarSeries:
        """
        Fetch intraday bars for charting and indicators.

        Args:
            symbol: Ticker symbol
            period: Chart period ("1d", "1w", "1M"); selects the bar interval
            count: Maximum number of bars

        Returns:
            BarSeries ordered oldest first

        Raises:
            MarketDataError: If the request fails or no bars are returned
        """
        params = {"symbols": symbol, "interval": period_to_interval(period), "limit": count}
        return self._fetch_bars("/intraday", params, symbol)

    def get_historical_bars(self, symbol: str, limit: int = EOD_LIMIT) -> BarSeries:
        """
        Fetch end-of-day history (most recent ``limit`` sessions).

        Returns:
            BarSeries ordered oldest first

        Raises:
            MarketDataError: If the request fails or no bars are returned
        """
        params = {"symbols": symbol, "limit": limit, "sort": "DESC"}
        return self._fetch_bars("/eod", params, symbol)

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _fetch_bars(self, path: str, params: dict[str, Any], symbol: str) -> BarSeries:
        try:
            payload = self._get(path, params)
            records = payload.get("data")
            if not records:
                raise MarketDataError(f"No bar data found for {symbol} at {path}")
            # Provider returns newest first
            series = BarSeries.from_newest_first(_parse_bar(raw) for raw in records)
        except MarketDataError as e:
            logger.error(f"Get bars error for {symbol} at {path}: {e}")
            raise
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Get bars error for {symbol} at {path}: {e}")
            raise MarketDataError(f"Malformed bar payload for {symbol}: {e}") from e

        logger.debug(f"Fetched {len(series)} bars for {symbol} from {path}")
        return series

    def _get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        """GET ``path`` with the access key attached and return the JSON body."""
        url = f"{self.base_url}{path}"
        query = {"access_key": self._api_key, **params}
        logger.debug(f"GET {url} params={params}")
        try:
            resp = self._session.get(url, params=query, timeout=self.timeout)
            resp.raise_for_status()
            payload = resp.json()
        except (requests.RequestException, ValueError) as e:
            raise MarketDataError(f"Request to {path} failed: {e}") from e

        if not isinstance(payload, dict):
            raise MarketDataError(f"Unexpected response body from {path}")
        return payload
