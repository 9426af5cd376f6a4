"""Text-level analysis: indicator summaries and sentiment heuristics."""

from stockdash.analysis.sentiment import (
    analyze_sentiment,
    calculate_correlation_score,
    sentiment_score,
)
from stockdash.analysis.summary import generate_technical_summary

__all__ = [
    "analyze_sentiment",
    "calculate_correlation_score",
    "generate_technical_summary",
    "sentiment_score",
]
