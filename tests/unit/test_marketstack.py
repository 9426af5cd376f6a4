"""Tests for the marketstack market-data client."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from unittest.mock import MagicMock

import pytest
import requests

from stockdash.core.errors import MarketDataError
from stockdash.data.marketstack import (
    MarketstackClient,
    lookback_range,
    period_to_interval,
)
from stockdash.models.config import MarketstackConfig

# ===== Mock helpers =====


def _response(payload: Any) -> MagicMock:
    resp = MagicMock()
    resp.json.return_value = payload
    resp.raise_for_status.return_value = None
    return resp


def _raw_bar(date: str, close: float) -> dict[str, Any]:
    return {
        "date": date,
        "symbol": "AAPL",
        "open": close - 1,
        "high": close + 1,
        "low": close - 2,
        "close": close,
        "volume": 1500.0,
    }


# ===== Fixtures =====


@pytest.fixture
def session() -> MagicMock:
    """Mock requests.Session."""
    return MagicMock()


@pytest.fixture
def client(session: MagicMock) -> MarketstackClient:
    """Client wired to the mock session."""
    return MarketstackClient("secret", session=session)


def _last_params(session: MagicMock) -> dict[str, Any]:
    return session.get.call_args.kwargs["params"]


def _last_url(session: MagicMock) -> str:
    return session.get.call_args.args[0]


# ===== Tests =====


class TestHelpers:
    """Tests for period helpers."""

    @pytest.mark.parametrize(
        ("period", "interval"),
        [("1d", "1h"), ("1w", "3h"), ("1M", "6h"), ("5y", "1h")],
    )
    def test_period_to_interval(self, period: str, interval: str) -> None:
        """Chart periods map to intraday intervals, hourly by default."""
        assert period_to_interval(period) == interval

    @pytest.mark.parametrize(
        ("period", "count", "expected"),
        [("1d", 10, "10d"), ("1w", 10, "14d"), ("1M", 21, "30d"), ("1y", 5, "1y")],
    )
    def test_lookback_range(self, period: str, count: int, expected: str) -> None:
        """Trading-day counts convert to calendar-day ranges."""
        assert lookback_range(period, count) == expected


class TestSearchTickers:
    """Tests for search_tickers."""

    def test_maps_results(self, client: MarketstackClient, session: MagicMock) -> None:
        """Exchange acronym is flattened onto the match."""
        session.get.return_value = _response(
            {
                "data": [
                    {"symbol": "AAPL", "name": "Apple Inc", "stock_exchange": {"acronym": "NASDAQ"}},
                    {"symbol": "APLE", "name": "Apple Hospitality", "stock_exchange": {"acronym": "NYSE"}},
                ]
            }
        )

        matches = client.search_tickers("apple")

        assert [m.symbol for m in matches] == ["AAPL", "APLE"]
        assert matches[0].exchange == "NASDAQ"
        assert _last_url(session) == "http://api.marketstack.com/v1/tickers"
        assert _last_params(session) == {"access_key": "secret", "search": "apple", "limit": 10}

    def test_no_data(self, client: MarketstackClient, session: MagicMock) -> None:
        """Missing data yields an empty list rather than an error."""
        session.get.return_value = _response({})
        assert client.search_tickers("zzz") == []


class TestRealtimeQuote:
    """Tests for get_realtime_quote."""

    def test_quote_from_latest_bar(self, client: MarketstackClient, session: MagicMock) -> None:
        """Change is close minus open of the latest bar."""
        session.get.return_value = _response(
            {
                "data": [
                    {
                        "symbol": "AAPL",
                        "open": 100.0,
                        "close": 102.0,
                        "volume": 5000,
                        "date": "2024-01-05T15:00:00+0000",
                    }
                ]
            }
        )

        quote = client.get_realtime_quote("AAPL")

        assert quote.price == 102.0
        assert quote.change == pytest.approx(2.0)
        assert quote.change_percent == 2.0
        assert quote.volume == 5000
        assert quote.timestamp == datetime(2024, 1, 5, 15, tzinfo=timezone.utc)
        assert _last_url(session).endswith("/intraday/latest")
        assert _last_params(session)["symbols"] == "AAPL"

    def test_empty_data_raises(self, client: MarketstackClient, session: MagicMock) -> None:
        """No quote is an error."""
        session.get.return_value = _response({"data": []})
        with pytest.raises(MarketDataError, match="No quote data"):
            client.get_realtime_quote("AAPL")

    def test_malformed_record_raises(self, client: MarketstackClient, session: MagicMock) -> None:
        """Missing fields surface as MarketDataError."""
        session.get.return_value = _response({"data": [{"symbol": "AAPL"}]})
        with pytest.raises(MarketDataError):
            client.get_realtime_quote("AAPL")


class TestBars:
    """Tests for intraday and end-of-day bars."""

    def test_intraday_reversed_to_chronological(
        self, client: MarketstackClient, session: MagicMock
    ) -> None:
        """Newest-first payloads become oldest-first series."""
        session.get.return_value = _response(
            {
                "data": [
                    _raw_bar("2024-01-05T12:00:00+0000", 103),
                    _raw_bar("2024-01-05T11:00:00+0000", 102),
                    _raw_bar("2024-01-05T10:00:00+0000", 101),
                ]
            }
        )

        series = client.get_intraday_bars("AAPL", period="1w", count=3)

        assert series.closes == [101, 102, 103]
        assert series[0].time < series[-1].time
        assert _last_url(session).endswith("/intraday")
        assert _last_params(session) == {
            "access_key": "secret",
            "symbols": "AAPL",
            "interval": "3h",
            "limit": 3,
        }

    def test_historical_params(self, client: MarketstackClient, session: MagicMock) -> None:
        """End-of-day history requests the latest 30 sessions, newest first."""
        session.get.return_value = _response(
            {"data": [_raw_bar("2024-01-05T00:00:00+0000", 10), _raw_bar("2024-01-04T00:00:00+0000", 9)]}
        )

        series = client.get_historical_bars("AAPL")

        assert series.closes == [9, 10]
        assert _last_url(session).endswith("/eod")
        params = _last_params(session)
        assert params["limit"] == 30
        assert params["sort"] == "DESC"

    def test_missing_data_raises(self, client: MarketstackClient, session: MagicMock) -> None:
        """A payload without data is an error."""
        session.get.return_value = _response({"error": {"code": "invalid_access_key"}})
        with pytest.raises(MarketDataError, match="No bar data"):
            client.get_intraday_bars("AAPL")

    def test_empty_bar_list_raises(self, client: MarketstackClient, session: MagicMock) -> None:
        """An empty data list means no bars and is an error."""
        session.get.return_value = _response({"data": []})
        with pytest.raises(MarketDataError, match="No bar data"):
            client.get_historical_bars("AAPL")
        with pytest.raises(MarketDataError, match="No bar data"):
            client.get_intraday_bars("AAPL")


class TestTransportErrors:
    """Network and HTTP failures propagate as MarketDataError."""

    def test_connection_error(self, client: MarketstackClient, session: MagicMock) -> None:
        """Transport failure is wrapped and chained."""
        session.get.side_effect = requests.ConnectionError("boom")
        with pytest.raises(MarketDataError) as exc_info:
            client.get_historical_bars("AAPL")
        assert isinstance(exc_info.value.__cause__, requests.ConnectionError)

    def test_http_error(self, client: MarketstackClient, session: MagicMock) -> None:
        """Non-2xx responses are errors."""
        resp = _response({})
        resp.raise_for_status.side_effect = requests.HTTPError("500 Server Error")
        session.get.return_value = resp
        with pytest.raises(MarketDataError, match="500"):
            client.get_realtime_quote("AAPL")

    def test_no_retry(self, client: MarketstackClient, session: MagicMock) -> None:
        """A failed request is attempted once."""
        session.get.side_effect = requests.Timeout("slow")
        with pytest.raises(MarketDataError):
            client.search_tickers("apple")
        assert session.get.call_count == 1


class TestFromConfig:
    """Tests for MarketstackClient.from_config."""

    def test_reads_env_key(self, monkeypatch: pytest.MonkeyPatch, session: MagicMock) -> None:
        """The access key comes from the configured env var."""
        monkeypatch.setenv("MARKETSTACK_API_KEY", "env-key")
        session.get.return_value = _response({})
        client = MarketstackClient.from_config(
            MarketstackConfig(base_url="https://example.test/v1/"), session=session
        )
        client.search_tickers("x")
        assert _last_url(session) == "https://example.test/v1/tickers"
        assert _last_params(session)["access_key"] == "env-key"

    def test_missing_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """No key configured is a ValueError."""
        monkeypatch.delenv("MARKETSTACK_API_KEY", raising=False)
        with pytest.raises(ValueError):
            MarketstackClient.from_config(MarketstackConfig())
