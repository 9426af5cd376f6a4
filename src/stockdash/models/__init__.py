"""Pydantic models for data representation."""

from stockdash.models.bar import Bar, BarSeries
from stockdash.models.config import (
    AppConfig,
    FeedConfig,
    MarketstackConfig,
    PerplexityConfig,
)
from stockdash.models.indicators import BollingerBands, MACDResult, TechnicalIndicators
from stockdash.models.quote import Quote, TickerMatch
from stockdash.models.report import (
    AnalysisReport,
    CompanyNews,
    CorrelationAnalysis,
    Sentiment,
)

__all__ = [
    # Market data
    "Bar",
    "BarSeries",
    "Quote",
    "TickerMatch",
    # Indicators
    "BollingerBands",
    "MACDResult",
    "TechnicalIndicators",
    # LLM output
    "AnalysisReport",
    "CompanyNews",
    "CorrelationAnalysis",
    "Sentiment",
    # Config
    "AppConfig",
    "FeedConfig",
    "MarketstackConfig",
    "PerplexityConfig",
]
