"""LLM-generated analysis models."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


class Sentiment(str, Enum):
    """Coarse sentiment label derived from keyword counts."""

    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class AnalysisReport(BaseModel):
    """
    Natural-language market commentary for one symbol.

    Attributes:
        timestamp: When the report was produced
        content: Generated text
        sentiment: Keyword-based sentiment of the content
    """

    timestamp: datetime = Field(default_factory=_utcnow, description="Creation time")
    content: str = Field(..., description="Generated commentary")
    sentiment: Sentiment = Field(default=Sentiment.NEUTRAL, description="Content sentiment")

    model_config = ConfigDict(frozen=True)


class CorrelationAnalysis(BaseModel):
    """Commentary relating a price move to news, with an agreement score in [0, 1]."""

    analysis: str = Field(..., description="Generated commentary")
    correlation_score: float = Field(..., description="Sentiment/price agreement", ge=0, le=1)
    timestamp: datetime = Field(default_factory=_utcnow, description="Creation time")

    model_config = ConfigDict(frozen=True)


class CompanyNews(BaseModel):
    """Generated news digest for a symbol."""

    news: str = Field(..., description="Generated news items")
    timestamp: datetime = Field(default_factory=_utcnow, description="Creation time")

    model_config = ConfigDict(frozen=True)
