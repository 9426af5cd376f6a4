"""Tests for the StockDashboard service."""

from __future__ import annotations

import random
import threading
from unittest.mock import MagicMock

import pytest

from stockdash.analysis.summary import RSI_OVERBOUGHT_HINT
from stockdash.core.errors import MarketDataError
from stockdash.data.marketstack import MarketstackClient
from stockdash.models.config import AppConfig
from stockdash.models.quote import Quote
from stockdash.models.report import AnalysisReport, Sentiment
from stockdash.services.dashboard import StockDashboard


@pytest.fixture
def market(make_series, sample_quote: Quote) -> MagicMock:
    """Market client returning a steady uptrend."""
    mock = MagicMock()
    mock.get_intraday_bars.return_value = make_series(range(1, 41))
    mock.get_historical_bars.return_value = make_series([10, 11, 12])
    mock.get_realtime_quote.return_value = sample_quote
    return mock


class TestTechnicalAnalysis:
    """Tests for technical_analysis."""

    def test_fetches_and_computes(self, market: MagicMock) -> None:
        """Bars are fetched with the requested period and summarised."""
        dashboard = StockDashboard(market)

        result = dashboard.technical_analysis("AAPL", period="1w", count=40)

        market.get_intraday_bars.assert_called_once_with("AAPL", period="1w", count=40)
        assert result.rsi == 100.0
        assert result.last_price == 40
        assert result.summary[0] == RSI_OVERBOUGHT_HINT
        assert result.macd is not None and result.macd.histogram == 0.0

    def test_history_signal_mode(self, market: MagicMock) -> None:
        """The dashboard's signal mode reaches the MACD calculation."""
        dashboard = StockDashboard(market, signal_mode="history")
        result = dashboard.technical_analysis("AAPL")
        assert result.macd is not None and result.macd.histogram > 0

    def test_fetch_error_propagates(self, market: MagicMock) -> None:
        """Market data failures are not swallowed."""
        market.get_intraday_bars.side_effect = MarketDataError("down")
        with pytest.raises(MarketDataError):
            StockDashboard(market).technical_analysis("AAPL")

    def test_empty_bar_payload_is_market_error(self) -> None:
        """No bars from the provider surfaces as MarketDataError, not ValueError."""
        session = MagicMock()
        session.get.return_value.json.return_value = {"data": []}
        client = MarketstackClient("secret", session=session)

        with pytest.raises(MarketDataError, match="No bar data"):
            StockDashboard(client).technical_analysis("AAPL")


class TestAIAnalysis:
    """Tests for ai_analysis."""

    def test_mock_report(self, market: MagicMock) -> None:
        """Mock mode needs no LLM client."""
        report = StockDashboard(market).ai_analysis("AAPL", use_mock=True, rng=random.Random(0))
        assert "AAPL" in report.content

    def test_requires_llm(self, market: MagicMock) -> None:
        """Live mode without an LLM client is an error."""
        with pytest.raises(RuntimeError):
            StockDashboard(market).ai_analysis("AAPL")

    def test_live_report(self, market: MagicMock, sample_quote: Quote) -> None:
        """The latest quote is passed to the LLM."""
        llm = MagicMock()
        llm.analyze_stock_data.return_value = AnalysisReport(
            content="ok", sentiment=Sentiment.NEUTRAL
        )

        report = StockDashboard(market, llm=llm).ai_analysis("AAPL")

        assert report.content == "ok"
        llm.analyze_stock_data.assert_called_once_with(sample_quote, None)
        market.get_historical_bars.assert_not_called()

    def test_live_report_with_history(self, market: MagicMock) -> None:
        """History is fetched only on request."""
        llm = MagicMock()
        StockDashboard(market, llm=llm).ai_analysis("AAPL", include_history=True)
        market.get_historical_bars.assert_called_once_with("AAPL")
        _, history = llm.analyze_stock_data.call_args.args
        assert history.closes == [10, 11, 12]


class TestWatchAndConfig:
    """Tests for the feed wiring and construction from config."""

    def test_watch_uses_interval(self, market: MagicMock) -> None:
        """The feed runs at the dashboard's interval."""
        got = threading.Event()
        sub = StockDashboard(market, feed_interval=0.01).watch("AAPL", lambda q: got.set())
        try:
            assert got.wait(5)
            assert sub.interval == 0.01
        finally:
            sub.cancel()

    def test_from_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Clients are built from environment keys."""
        monkeypatch.setenv("MARKETSTACK_API_KEY", "m")
        monkeypatch.setenv("PERPLEXITY_API_KEY", "p")
        dashboard = StockDashboard.from_config(AppConfig())
        assert dashboard.llm is not None
        assert dashboard.feed_interval == 1.0

    def test_from_config_without_llm(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """The LLM key is not needed when commentary is disabled."""
        monkeypatch.setenv("MARKETSTACK_API_KEY", "m")
        monkeypatch.delenv("PERPLEXITY_API_KEY", raising=False)
        dashboard = StockDashboard.from_config(AppConfig(), with_llm=False)
        assert dashboard.llm is None

    def test_watch_interval_override(self, market: MagicMock) -> None:
        """An explicit interval takes precedence over the configured one."""
        got = threading.Event()
        sub = StockDashboard(market, feed_interval=5.0).watch(
            "AAPL", lambda q: got.set(), interval=0.01
        )
        try:
            assert got.wait(5)
            assert sub.interval == 0.01
        finally:
            sub.cancel()
