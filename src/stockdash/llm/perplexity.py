"""Perplexity chat-completion client for market commentary."""

from __future__ import annotations

import logging
import random
from typing import Any, Optional

import requests

from stockdash.analysis.sentiment import analyze_sentiment, calculate_correlation_score
from stockdash.core.errors import LLMError
from stockdash.llm.prompts import (
    ANALYSIS_SYSTEM_PROMPT,
    CORRELATION_SYSTEM_PROMPT,
    NEWS_SYSTEM_PROMPT,
    build_analysis_prompt,
    build_correlation_prompt,
    build_news_prompt,
)
from stockdash.models.bar import BarSeries
from stockdash.models.config import PerplexityConfig
from stockdash.models.quote import Quote
from stockdash.models.report import AnalysisReport, CompanyNews, CorrelationAnalysis, Sentiment

logger = logging.getLogger(__name__)


def extract_content(payload: Any) -> str:
    """Return ``choices[0].message.content`` from a chat-completion response.

    Raises:
        LLMError: If the field is missing or not a string
    """
    try:
        content = payload["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise LLMError(f"Malformed chat completion response: {e!r}") from e
    if not isinstance(content, str):
        raise LLMError("Chat completion content is not text")
    return content


class PerplexityClient:
    """
    Client for a Perplexity-style ``/chat/completions`` endpoint.

    Each request carries a system persona message, a user prompt and the
    sampling parameters from ``PerplexityConfig``. There are no retries;
    failures are logged and raised as ``LLMError``.
    """

    def __init__(
        self,
        api_key: str,
        config: Optional[PerplexityConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Bearer token
            config: Endpoint, model and sampling configuration
            session: Optional pre-built session (for connection reuse or tests)
        """
        self.config = config or PerplexityConfig()
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Accept": "application/json",
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            }
        )

    @classmethod
    def from_config(
        cls,
        config: PerplexityConfig,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> PerplexityClient:
        """Build a client from configuration, reading the key from the environment."""
        key = api_key or config.get_api_key()
        if not key:
            raise ValueError(f"{config.api_key_env} not set in environment")
        return cls(key, config=config, session=session)

    # ------------------------------------------------------------------
    # Low-level completion
    # ------------------------------------------------------------------

    def chat(self, body: dict[str, Any]) -> dict[str, Any]:
        """POST a raw chat-completion request and return the JSON response."""
        url = f"{self.config.base_url.rstrip('/')}/chat/completions"
        logger.debug(f"POST {url} model={body.get('model')}")
        try:
            resp = self._session.post(url, json=body, timeout=self.config.timeout)
            resp.raise_for_status()
            return resp.json()
        except (requests.RequestException, ValueError) as e:
            raise LLMError(f"Chat completion request failed: {e}") from e

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        model: Optional[str] = None,
        **params: Any,
    ) -> str:
        """
        Generate text for a system persona and user prompt.

        Args:
            system_prompt: Persona / instructions
            user_prompt: The question
            model: Model override (defaults to ``config.model``)
            **params: Extra request fields (temperature, max_tokens, ...)

        Returns:
            Generated text
        """
        body: dict[str, Any] = {
            "model": model or self.config.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            **params,
        }
        return extract_content(self.chat(body))

    def _sampling_params(self) -> dict[str, float]:
        return {
            "temperature": self.config.temperature,
            "top_p": self.config.top_p,
            "frequency_penalty": self.config.frequency_penalty,
            "presence_penalty": self.config.presence_penalty,
        }

    # ------------------------------------------------------------------
    # Dashboard operations
    # ------------------------------------------------------------------

    def analyze_stock_correlation(
        self,
        symbol: str,
        quote: Quote,
        price_change: float,
    ) -> CorrelationAnalysis:
        """
        Explain a price move in terms of news and score how well the tone matches.

        Args:
            symbol: Ticker symbol
            quote: Latest quote
            price_change: Percentage price change

        Raises:
            LLMError: If the request fails
        """
        try:
            analysis = self.complete(
                CORRELATION_SYSTEM_PROMPT,
                build_correlation_prompt(symbol, quote, price_change),
                **self._sampling_params(),
            )
        except LLMError as e:
            logger.error(f"Perplexity correlation analysis failed for {symbol}: {e}")
            raise

        return CorrelationAnalysis(
            analysis=analysis,
            correlation_score=calculate_correlation_score(analysis, price_change),
        )

    def get_company_news(self, symbol: str) -> CompanyNews:
        """
        Generate a five-item news digest for ``symbol``.

        Raises:
            LLMError: If the request fails
        """
        try:
            news = self.complete(
                NEWS_SYSTEM_PROMPT,
                build_news_prompt(symbol),
                **self._sampling_params(),
            )
        except LLMError as e:
            logger.error(f"Get company news failed for {symbol}: {e}")
            raise
        return CompanyNews(news=news)

    def analyze_stock_data(
        self,
        quote: Quote,
        history: Optional[BarSeries] = None,
    ) -> AnalysisReport:
        """
        Generate a structured analysis report for a quote.

        Args:
            quote: Latest quote
            history: Optional recent bars to include in the prompt

        Raises:
            LLMError: If the request fails or the response is malformed
        """
        body = {
            "model": self.config.analysis_model,
            "messages": [
                {"role": "system", "content": ANALYSIS_SYSTEM_PROMPT},
                {"role": "user", "content": build_analysis_prompt(quote, history)},
            ],
            "max_tokens": self.config.max_tokens,
        }
        try:
            return self.parse_response(self.chat(body))
        except LLMError as e:
            logger.error(f"Analyze stock data failed for {quote.symbol}: {e}")
            raise

    @staticmethod
    def parse_response(payload: dict[str, Any]) -> AnalysisReport:
        """Turn a chat-completion response into an ``AnalysisReport``."""
        content = extract_content(payload)
        return AnalysisReport(content=content, sentiment=analyze_sentiment(content))

    @staticmethod
    def mock_analysis(quote: Quote, rng: Optional[random.Random] = None) -> AnalysisReport:
        """
        Build a canned report without calling the API (demo mode).

        Args:
            quote: Latest quote
            rng: Random source; pass a seeded ``random.Random`` for repeatable output
        """
        rng = rng or random.Random()

        def pick(a: str, b: str) -> str:
            return a if rng.random() > 0.5 else b

        direction = "上涨" if quote.change > 0 else "下跌"
        content = f"""
分析报告：{quote.symbol}

1. 价格走势分析
当前价格 {quote.price}，相比前一交易日{direction}{abs(quote.change)}（{quote.change_percent}%）。
从技术面来看，价格走势显示出{pick("上升", "下降")}趋势。

2. 成交量分析
今日成交量处于{pick("活跃", "平稳")}水平，市场交易意愿{pick("强烈", "一般")}。

3. 技术指标分析
MACD指标显示{pick("金叉形态", "死叉形态")}，RSI指标处于{pick("超买", "超卖")}区域。

4. 投资建议
建议投资者{pick("可以考虑逢低买入", "保持观望态度")}。

5. 风险提示
请注意市场波动风险，建议设置止损位置，控制仓位。
"""
        sentiment = Sentiment.POSITIVE if rng.random() > 0.5 else Sentiment.NEGATIVE
        return AnalysisReport(content=content, sentiment=sentiment)

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()
