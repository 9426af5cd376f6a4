"""Keyword heuristics over generated (Chinese-language) market commentary."""

from __future__ import annotations

from stockdash.models.report import Sentiment

POSITIVE_WORDS: tuple[str, ...] = ("上涨", "增长", "看好", "机会", "突破", "强劲", "利好")
NEGATIVE_WORDS: tuple[str, ...] = ("下跌", "下滑", "风险", "警惕", "回调", "疲软", "利空")

# "下跌" is listed twice and therefore weighs double.
CORRELATION_POSITIVE_WORDS: tuple[str, ...] = ("利好", "上涨", "看好", "突破", "增长", "利润", "创新")
CORRELATION_NEGATIVE_WORDS: tuple[str, ...] = ("利空", "下跌", "担忧", "风险", "下跌", "亏损", "问题")

SENTIMENT_THRESHOLD = 2
PRICE_CHANGE_SCALE = 5.0


def sentiment_score(content: str) -> int:
    """Occurrences of positive keywords minus occurrences of negative keywords."""
    score = 0
    for word in POSITIVE_WORDS:
        score += content.count(word)
    for word in NEGATIVE_WORDS:
        score -= content.count(word)
    return score


def analyze_sentiment(content: str) -> Sentiment:
    """
    Classify text as positive, neutral or negative.

    A score above 2 is positive, below -2 negative, anything else neutral.
    """
    score = sentiment_score(content)
    if score > SENTIMENT_THRESHOLD:
        return Sentiment.POSITIVE
    if score < -SENTIMENT_THRESHOLD:
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL


def calculate_correlation_score(analysis: str, price_change: float) -> float:
    """
    Agreement between the tone of ``analysis`` and the observed price move.

    Keyword presence (not count) yields a sentiment in [-1, 1]; the price
    change is scaled by 5% and clamped to [-1, 1]. The result is
    ``1 - |sentiment - price| / 2``, so 1.0 means full agreement and 0.0
    full disagreement.

    Args:
        analysis: Generated commentary
        price_change: Percentage price change (e.g. 2.5 for +2.5%)
    """
    score = 0
    for word in CORRELATION_POSITIVE_WORDS:
        if word in analysis:
            score += 1
    for word in CORRELATION_NEGATIVE_WORDS:
        if word in analysis:
            score -= 1

    sentiment = score / max(len(CORRELATION_POSITIVE_WORDS), len(CORRELATION_NEGATIVE_WORDS))
    price_score = max(min(price_change / PRICE_CHANGE_SCALE, 1.0), -1.0)
    return 1 - abs(sentiment - price_score) / 2
