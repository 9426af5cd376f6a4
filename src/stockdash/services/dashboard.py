"""Dashboard service wiring market data, indicators and commentary together."""

from __future__ import annotations

import logging
import random
from typing import Optional

from stockdash.data.marketstack import MarketstackClient
from stockdash.feed.mock import QuoteCallback, QuoteSource, Subscription, subscribe_to_realtime_data
from stockdash.indicators.technical import SignalMode, calculate_technical_indicators
from stockdash.llm.perplexity import PerplexityClient
from stockdash.models.config import AppConfig
from stockdash.models.indicators import TechnicalIndicators
from stockdash.models.report import AnalysisReport

logger = logging.getLogger(__name__)


class StockDashboard:
    """
    Entry point used by a UI layer.

    Holds explicitly injected clients; construct one per application and
    pass it around rather than relying on module-level instances.

    Attributes:
        market: Market-data client
        llm: LLM client (None disables live commentary)
        signal_mode: MACD signal line mode used for indicators
        feed_interval: Seconds between mock feed quotes
    """

    def __init__(
        self,
        market: MarketstackClient,
        llm: Optional[PerplexityClient] = None,
        signal_mode: SignalMode = "broadcast",
        feed_interval: float = 1.0,
    ) -> None:
        self.market = market
        self.llm = llm
        self.signal_mode = signal_mode
        self.feed_interval = feed_interval

    @classmethod
    def from_config(cls, config: AppConfig, with_llm: bool = True) -> StockDashboard:
        """Build clients from configuration (keys come from the environment)."""
        market = MarketstackClient.from_config(config.marketstack)
        llm = PerplexityClient.from_config(config.perplexity) if with_llm else None
        return cls(market, llm=llm, feed_interval=config.feed.interval)

    def technical_analysis(
        self,
        symbol: str,
        period: str = "1d",
        count: int = 100,
    ) -> TechnicalIndicators:
        """
        Fetch intraday bars and compute indicators with a summary.

        Raises:
            MarketDataError: If the fetch fails or no bars are returned
        """
        series = self.market.get_intraday_bars(symbol, period=period, count=count)
        logger.debug(f"Computing indicators for {symbol} over {len(series)} bars")
        return calculate_technical_indicators(series, signal_mode=self.signal_mode)

    def ai_analysis(
        self,
        symbol: str,
        use_mock: bool = False,
        include_history: bool = False,
        rng: Optional[random.Random] = None,
    ) -> AnalysisReport:
        """
        Fetch the latest quote and produce commentary for it.

        Args:
            symbol: Ticker symbol
            use_mock: Generate a canned report instead of calling the LLM
            include_history: Include end-of-day history in the prompt
            rng: Random source for the mock report

        Raises:
            MarketDataError: If the quote fetch fails
            LLMError: If the LLM call fails
            RuntimeError: If live commentary is requested without an LLM client
        """
        quote = self.market.get_realtime_quote(symbol)
        if use_mock:
            return PerplexityClient.mock_analysis(quote, rng=rng)
        if self.llm is None:
            raise RuntimeError("No LLM client configured; use mock analysis instead")

        history = self.market.get_historical_bars(symbol) if include_history else None
        return self.llm.analyze_stock_data(quote, history)

    def watch(
        self,
        symbol: str,
        callback: QuoteCallback,
        source: Optional[QuoteSource] = None,
        interval: Optional[float] = None,
    ) -> Subscription:
        """Start the simulated real-time feed for ``symbol``.

        ``interval`` overrides the configured ``feed_interval``.
        """
        if interval is None:
            interval = self.feed_interval
        return subscribe_to_realtime_data(symbol, callback, source=source, interval=interval)
